"""Glyph advance widths of Verdana at 11px, the font badges are rendered in."""

import unicodedata

VERDANA_11_WIDTHS: dict[str, float] = {
    " ": 3.87, "!": 4.33, '"': 5.05, "#": 9.0, "$": 6.99, "%": 11.84, "&": 7.99, "'": 2.95,
    "(": 4.99, ")": 4.99, "*": 6.99, "+": 9.0, ",": 4.0, "-": 4.99, ".": 4.0, "/": 4.99,
    "0": 6.99, "1": 6.99, "2": 6.99, "3": 6.99, "4": 6.99, "5": 6.99, "6": 6.99, "7": 6.99,
    "8": 6.99, "9": 6.99, ":": 4.99, ";": 4.99, "<": 9.0, "=": 9.0, ">": 9.0, "?": 6.0,
    "@": 11.0, "A": 7.52, "B": 7.54, "C": 7.68, "D": 8.48, "E": 6.96, "F": 6.32, "G": 8.53,
    "H": 8.27, "I": 4.61, "J": 5.0, "K": 7.62, "L": 6.12, "M": 9.27, "N": 8.23, "O": 8.66,
    "P": 6.63, "Q": 8.66, "R": 7.65, "S": 7.52, "T": 6.78, "U": 8.05, "V": 7.52, "W": 10.88,
    "X": 7.54, "Y": 6.77, "Z": 7.54, "[": 4.99, "\\": 4.99, "]": 4.99, "^": 9.0, "_": 6.99,
    "`": 6.99, "a": 6.61, "b": 6.85, "c": 5.73, "d": 6.85, "e": 6.55, "f": 3.87, "g": 6.85,
    "h": 6.96, "i": 3.02, "j": 3.79, "k": 6.51, "l": 3.02, "m": 10.7, "n": 6.96, "o": 6.68,
    "p": 6.85, "q": 6.85, "r": 4.69, "s": 5.73, "t": 4.33, "u": 6.96, "v": 6.51, "w": 9.0,
    "x": 6.51, "y": 6.51, "z": 5.78, "{": 6.98, "|": 4.99, "}": 6.98, "~": 9.0,
}  # fmt: skip

FULL_WIDTH = 11.0  # CJK and other East Asian wide glyphs take a full em
FALLBACK_WIDTH = VERDANA_11_WIDTHS["m"]


def char_width(char: str) -> float:
    """Advance width of a single character in pixels."""
    if char in VERDANA_11_WIDTHS:
        return VERDANA_11_WIDTHS[char]
    if unicodedata.category(char) in ("Mn", "Me"):
        return 0.0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return FULL_WIDTH
    # Accented Latin letters are as wide as their base letter
    base = unicodedata.normalize("NFD", char)[0]
    if base in VERDANA_11_WIDTHS:
        return VERDANA_11_WIDTHS[base]
    return FALLBACK_WIDTH


def text_width(text: str) -> float:
    """Width of a run of text in pixels."""
    return sum(char_width(char) for char in text)
