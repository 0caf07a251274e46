from __future__ import annotations
import re
from typing import Dict, List, Mapping, Optional, Tuple

_HEBREW_MARKS_RE = re.compile(r"[\u0591-\u05C7]")

MAQAF = "\u05BE"  # Hebrew maqaf

# 22 letters in alphabet order, then the five final forms (ך ם ן ף ץ)
_LETTERS = (
    "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט", "י", "כ", "ל", "מ", "נ", "ס", "ע", "פ", "צ",
    "ק", "ר", "ש", "ת",
    "ך", "ם", "ן", "ף", "ץ",
)

CHAR_TO_INDEX: Dict[str, int] = {ch: i for i, ch in enumerate(_LETTERS, 1)}

# Letter names, used by Otiyot BeMilui
FILLED_LETTERS: Dict[str, Tuple[str, ...]] = {
    "א": ("א", "ל", "ף"),
    "ב": ("ב", "י", "ת"),
    "ג": ("ג", "י", "מ", "ל"),
    "ד": ("ד", "ל", "ת"),
    "ה": ("ה", "א"),
    "ו": ("ו", "י", "ו"),
    "ז": ("ז", "י", "ן"),
    "ח": ("ח", "י", "ת"),
    "ט": ("ט", "י", "ת"),
    "י": ("י", "ו", "ד"),
    "כ": ("כ", "ף"),
    "ל": ("ל", "מ", "ד"),
    "מ": ("מ", "ם"),
    "נ": ("נ", "ו", "ן"),
    "ס": ("ס", "מ", "ך"),
    "ע": ("ע", "י", "ן"),
    "פ": ("פ", "א"),
    "צ": ("צ", "ד", "י"),
    "ק": ("ק", "ו", "ף"),
    "ר": ("ר", "י", "ש"),
    "ש": ("ש", "י", "ן"),
    "ת": ("ת", "י", "ו"),
}

def index_of(ch: str) -> Optional[int]:
    """1-based alphabet position of a letter, or None for anything else."""
    return CHAR_TO_INDEX.get(ch)

def letter_for_index(index: int, table: Mapping[str, int] = CHAR_TO_INDEX) -> Optional[str]:
    # first hit in table order, so a base letter always beats a later entry
    for ch, i in table.items():
        if i == index:
            return ch
    return None

def is_hebrew_vowel(ch: str) -> bool:
    return "\u0591" <= ch <= "\u05C7"

def strip_vowels(text: str) -> str:
    """Remove nikud, cantillation and the other marks in U+0591..U+05C7."""
    if not text:
        return ""
    return _HEBREW_MARKS_RE.sub("", text)

def tokenize(text: str) -> List[str]:
    """
    Split text into words on whitespace and on maqaf.

    Splitting happens on the raw text, BEFORE any vowel stripping
    (maqaf itself is inside the marks range!).
    """
    if not text:
        return []
    words: List[str] = []
    for chunk in text.split():
        words.extend(w for w in chunk.split(MAQAF) if w)
    return words
