"""Memorial candidate record."""

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from ..utils.name_normalizer import canonical_name

DateLike = Union[str, date, datetime, None]


# Wire (camelCase) name -> attribute name
_FIELD_ALIASES = {
    'firstName': 'first_name',
    'middleName': 'middle_name',
    'lastName': 'last_name',
    'birthDate': 'birth_date',
    'deathDate': 'death_date',
    'birthPlace': 'birth_place',
    'restingPlace': 'resting_place',
    'viewCount': 'view_count',
    'profilePhotoUrl': 'profile_photo_url',
}


@dataclass(frozen=True)
class MemorialCandidate:
    """A person record being compared against existing memorials.

    Only the identity fields (names, dates, places) take part in scoring.
    ``slug``, ``view_count`` and ``profile_photo_url`` are carried through
    for display. An empty ``id`` marks a record that has not been saved yet.
    """
    first_name: str
    last_name: str
    id: str = ""
    middle_name: Optional[str] = None
    nickname: Optional[str] = None
    birth_date: DateLike = None
    death_date: DateLike = None
    birth_place: Optional[str] = None
    resting_place: Optional[str] = None
    slug: Optional[str] = None
    view_count: Optional[int] = None
    profile_photo_url: Optional[str] = None

    @property
    def has_required_names(self) -> bool:
        """True if both first and last name keep something after normalization.

        Blank, punctuation-only and suffix-only names ("Jr.") do not count.
        """
        return all(
            isinstance(v, str) and canonical_name(v)
            for v in (self.first_name, self.last_name)
        )

    def full_name(self) -> str:
        """Return formatted full name."""
        parts = [self.first_name, self.middle_name, self.last_name]
        return ' '.join(p for p in parts if p)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemorialCandidate":
        """Create a candidate from a camelCase or snake_case mapping.

        Unknown keys are ignored. Missing names become empty strings so that
        validation can report them instead of failing here.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value

        kwargs.setdefault('first_name', '')
        kwargs.setdefault('last_name', '')
        if kwargs.get('id') is None:
            kwargs['id'] = ''
        else:
            kwargs['id'] = str(kwargs['id'])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Return a camelCase dict suitable for JSON."""
        reverse = {v: k for k, v in _FIELD_ALIASES.items()}
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (date, datetime)):
                value = value.isoformat()
            result[reverse.get(f.name, f.name)] = value
        return result

    def __str__(self) -> str:
        """Human-readable description."""
        life = ''
        if self.birth_date or self.death_date:
            life = f" ({self.birth_date or '?'} - {self.death_date or '?'})"
        return f"{self.full_name()}{life}"
