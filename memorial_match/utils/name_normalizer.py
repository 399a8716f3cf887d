"""
Name normalization for matching and canonical keys.

All comparisons are case-insensitive and diacritic-insensitive: names are
NFKD-decomposed, combining marks dropped, lowercased and stripped of
punctuation before any similarity is computed.
"""

import re
import unicodedata
from typing import List, Optional

# Generational suffixes dropped before comparison
NAME_SUFFIXES = {'jr', 'sr', 'ii', 'iii', 'iv'}

# Letters NFKD does not decompose into a base letter
_SPECIAL_LETTERS = str.maketrans({
    'ø': 'o', 'Ø': 'O',
    'æ': 'ae', 'Æ': 'AE',
    'œ': 'oe', 'Œ': 'OE',
    'ß': 'ss',
    'ł': 'l', 'Ł': 'L',
    'đ': 'd', 'Đ': 'D',
    'þ': 'th', 'Þ': 'TH',
})

# Letters and digits in any script survive; everything else separates
_NON_ALNUM = re.compile(r'[^\w\s]|_')
_WHITESPACE = re.compile(r'\s+')


def strip_diacritics(text: str) -> str:
    """Remove accents (é -> e, ø -> o, ß -> ss)."""
    decomposed = unicodedata.normalize('NFKD', text.translate(_SPECIAL_LETTERS))
    return ''.join(c for c in decomposed if not unicodedata.combining(c))


def fold_text(text: Optional[str]) -> str:
    """Lowercase, strip diacritics, replace punctuation with spaces.

    Returns "" for None or blank input.
    """
    if not text:
        return ""

    folded = strip_diacritics(text).lower()
    # Apostrophes join (O'Brien -> obrien), other punctuation separates
    folded = folded.replace("'", '').replace('’', '')
    folded = _NON_ALNUM.sub(' ', folded)
    return _WHITESPACE.sub(' ', folded).strip()


def name_tokens(name: Optional[str]) -> List[str]:
    """Split a name into normalized tokens with suffixes removed."""
    return [t for t in fold_text(name).split() if t not in NAME_SUFFIXES]


def normalize_name(name: Optional[str]) -> str:
    """Normalize a name part for similarity comparison.

    >>> normalize_name("  José-María Jr. ")
    'jose maria'
    """
    return ' '.join(name_tokens(name))


def canonical_name(name: Optional[str]) -> str:
    """Normalize a name part for the canonical hash.

    Spaces are removed too, so only lowercase letters and digits remain.
    """
    return ''.join(name_tokens(name))
