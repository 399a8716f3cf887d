"""Place name normalization for fuzzy comparison."""

from typing import Optional

from .name_normalizer import fold_text

US_STATES = {
    'al': 'alabama', 'ak': 'alaska', 'az': 'arizona', 'ar': 'arkansas',
    'ca': 'california', 'co': 'colorado', 'ct': 'connecticut', 'de': 'delaware',
    'fl': 'florida', 'ga': 'georgia', 'hi': 'hawaii', 'id': 'idaho',
    'il': 'illinois', 'in': 'indiana', 'ia': 'iowa', 'ks': 'kansas',
    'ky': 'kentucky', 'la': 'louisiana', 'me': 'maine', 'md': 'maryland',
    'ma': 'massachusetts', 'mi': 'michigan', 'mn': 'minnesota', 'ms': 'mississippi',
    'mo': 'missouri', 'mt': 'montana', 'ne': 'nebraska', 'nv': 'nevada',
    'nh': 'new hampshire', 'nj': 'new jersey', 'nm': 'new mexico', 'ny': 'new york',
    'nc': 'north carolina', 'nd': 'north dakota', 'oh': 'ohio', 'ok': 'oklahoma',
    'or': 'oregon', 'pa': 'pennsylvania', 'ri': 'rhode island', 'sc': 'south carolina',
    'sd': 'south dakota', 'tn': 'tennessee', 'tx': 'texas', 'ut': 'utah',
    'vt': 'vermont', 'va': 'virginia', 'wa': 'washington', 'wv': 'west virginia',
    'wi': 'wisconsin', 'wy': 'wyoming', 'dc': 'district of columbia',
}

PLACE_ABBREVIATIONS = {
    'st': 'saint',
    'ste': 'sainte',
    'mt': 'mount',
    'ft': 'fort',
    'co': 'county',
    'twp': 'township',
    'cem': 'cemetery',
}

# State codes that are also ordinary words; only expanded as the last token
_AMBIGUOUS_STATE_CODES = {'in', 'me', 'or', 'oh', 'hi', 'co', 'la', 'pa', 'ok', 'de', 'id', 'al'}

_COUNTRY_SUFFIXES = (['united', 'states', 'of', 'america'], ['united', 'states'], ['usa'], ['us'])


def normalize_place(place: Optional[str]) -> str:
    """
    Normalize a free-text place for comparison.

    Folds case and accents, drops a trailing US country name and expands
    state codes and common abbreviations.

    >>> normalize_place("Chicago, IL")
    'chicago illinois'
    >>> normalize_place("St. Louis, Missouri, USA")
    'saint louis missouri'
    """
    tokens = fold_text(place).split()
    for suffix in _COUNTRY_SUFFIXES:
        if len(tokens) > len(suffix) and tokens[-len(suffix):] == suffix:
            tokens = tokens[:-len(suffix)]
            break

    if not tokens:
        return ""

    last = len(tokens) - 1
    expanded = []
    for i, token in enumerate(tokens):
        if i > 0 and token in US_STATES and (token not in _AMBIGUOUS_STATE_CODES or i == last):
            expanded.append(US_STATES[token])
        elif token in PLACE_ABBREVIATIONS:
            expanded.append(PLACE_ABBREVIATIONS[token])
        else:
            expanded.append(token)

    return ' '.join(expanded)
