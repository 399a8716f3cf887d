"""Normalization helpers for names, dates and places."""

from .name_normalizer import normalize_name, canonical_name, fold_text, strip_diacritics
from .date_normalizer import parse_date, normalize_date, UNKNOWN_DATE
from .place_normalizer import normalize_place

__all__ = [
    'normalize_name',
    'canonical_name',
    'fold_text',
    'strip_diacritics',
    'parse_date',
    'normalize_date',
    'UNKNOWN_DATE',
    'normalize_place',
]
