"""Transliteration of accented and non-ASCII Latin characters to ASCII.

Characters listed in ``LATIN_MAP`` are replaced from the table. Anything
else outside ASCII is decomposed (NFKD) and stripped of combining marks,
so ``"é"`` becomes ``"e"``. Characters with no Latin equivalent are kept
as-is; callers that need pure ASCII strip them afterwards.
"""

import unicodedata

# Letters that do not decompose into a base letter + combining mark.
LATIN_MAP: dict[str, str] = {
    "Æ": "AE",
    "æ": "ae",
    "Ǽ": "AE",
    "ǽ": "ae",
    "Œ": "OE",
    "œ": "oe",
    "Ø": "O",
    "ø": "o",
    "Ǿ": "O",
    "ǿ": "o",
    "Ð": "D",
    "ð": "d",
    "Đ": "D",
    "đ": "d",
    "Þ": "TH",
    "þ": "th",
    "ß": "ss",
    "ẞ": "SS",
    "Ł": "L",
    "ł": "l",
    "Ħ": "H",
    "ħ": "h",
    "Ŧ": "T",
    "ŧ": "t",
    "Ŋ": "N",
    "ŋ": "n",
    "ı": "i",
    "ĸ": "k",
    "Ŀ": "L",
    "ŀ": "l",
    "ſ": "s",
    "Ƒ": "F",
    "ƒ": "f",
    "Ɨ": "I",
    "ɨ": "i",
    "Ƶ": "Z",
    "ƶ": "z",
    "Ĳ": "IJ",
    "ĳ": "ij",
    "ŉ": "n",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "\u2013": "-",
    "\u2014": "-",
    "\u00a0": " ",
}


def _latinize_char(char: str) -> str:
    if char.isascii():
        return char
    mapped = LATIN_MAP.get(char)
    if mapped is not None:
        return mapped
    decomposed = unicodedata.normalize("NFKD", char)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped or char


def latinize(text: str) -> str:
    """Return ``text`` with Latin letters reduced to their ASCII form."""
    return "".join(_latinize_char(char) for char in text)
