import re
import unicodedata

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Fold text for locale- and punctuation-insensitive substring matching.

    Lower-cases, decomposes accented characters and drops the combining marks
    ("Resolución" -> "resolucion"), turns every non-word, non-space character
    into a space, collapses whitespace runs and trims both ends.
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    spaced = _NON_WORD.sub(" ", stripped)
    return _WHITESPACE.sub(" ", spaced).strip()
