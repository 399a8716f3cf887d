"""
Tests for duplicate finding.
"""

import math
from dataclasses import replace

import pytest

from memorial_match import InvalidInputError, MemorialCandidate
from memorial_match.matching import (
    ConfidenceLevel,
    DuplicateFinder,
    SimilarityScorer,
    find_potential_duplicates,
    get_confidence_label,
)


class TestFindPotentialDuplicates:
    """Tests for find_potential_duplicates."""

    def test_demo_scenario(self, john_smith, demo_memorials):
        """John Smith finds both the exact record and the Smyth variant."""
        matches = find_potential_duplicates(john_smith, demo_memorials, 0.5)
        ids = [m.candidate.id for m in matches]

        assert ids[:2] == ["demo-1", "demo-4"]
        assert "demo-2" not in ids
        assert "demo-3" not in ids

    def test_exact_hash_scores_one(self, john_smith, demo_memorials):
        matches = find_potential_duplicates(john_smith, demo_memorials, 0.5)
        exact = matches[0]

        assert exact.exact_hash_match is True
        assert exact.score == 1.0
        assert exact.reasons[0] == "Same name and dates"

    def test_smyth_match_fields(self, john_smith, john_smyth):
        matches = find_potential_duplicates(john_smith, [john_smyth], 0.5)

        assert len(matches) == 1
        match = matches[0]
        assert match.exact_hash_match is False
        assert 0.5 < match.score < 1.0
        assert [f.field for f in match.matched_fields] == ['name', 'birth_date', 'death_date', 'birth_place']
        assert "First name: John" in match.reasons
        assert "Last name: Smyth" in match.reasons
        assert "Similar birth date" in match.reasons
        assert "Similar birth place: Chicago, IL" in match.reasons

    def test_threshold_boundary_inclusive(self, john_smith, john_smyth):
        """A score exactly at the threshold is kept; just above it is not."""
        total = SimilarityScorer().score(john_smith, john_smyth).total

        assert len(find_potential_duplicates(john_smith, [john_smyth], total)) == 1
        assert find_potential_duplicates(john_smith, [john_smyth], math.nextafter(total, 1.0)) == []

    def test_exact_hash_overrides_threshold(self):
        """Same normalized name and dates are returned even at 0.99."""
        candidate = MemorialCandidate(
            first_name="Robert",
            last_name="Williams",
            birth_date="1958-11-20",
            death_date="2023-04-10",
            birth_place="Anchorage, Alaska",
            resting_place="Angelus Rosedale",
        )
        existing = MemorialCandidate(
            id="r-1",
            first_name="ROBERT",
            last_name="williams",
            birth_date="1958-11-20",
            death_date="2023-04-10",
            birth_place="Miami, Florida",
            resting_place="Hollywood Forever Cemetery",
        )
        assert SimilarityScorer().score(candidate, existing).total < 0.99

        matches = find_potential_duplicates(candidate, [existing], 0.99)
        assert len(matches) == 1
        assert matches[0].score == 1.0
        assert matches[0].exact_hash_match is True

    def test_sorted_by_score_then_id(self):
        candidate = MemorialCandidate(first_name="Anna", last_name="Berg")
        pool = [
            MemorialCandidate(id="c", first_name="Anna", last_name="Berg", birth_date="1900-01-01"),
            MemorialCandidate(id="a", first_name="Anna", last_name="Berg", birth_date="1901-01-01"),
            MemorialCandidate(id="b", first_name="Anne", last_name="Berg"),
        ]
        matches = find_potential_duplicates(candidate, pool, 0.0)

        # "c" and "a" tie at 1.0 on name alone, "b" scores lower
        assert [m.candidate.id for m in matches] == ["a", "c", "b"]

    def test_skips_own_record(self, demo_memorials):
        saved = demo_memorials[0]
        ids = [m.candidate.id for m in find_potential_duplicates(saved, demo_memorials, 0.5)]
        assert saved.id not in ids
        assert "demo-4" in ids

    def test_new_record_id_does_not_skip(self, john_smith):
        """An unsaved candidate (empty id) is compared against every record."""
        unsaved_twin = replace(john_smith, id="")
        assert len(find_potential_duplicates(john_smith, [unsaved_twin], 0.5)) == 1

    def test_pool_records_without_names_are_skipped(self, john_smith, john_smyth):
        broken = MemorialCandidate(id="broken", first_name="", last_name="Smith")
        suffix_only = MemorialCandidate(id="suffix", first_name="Jr.", last_name="Smith")
        matches = find_potential_duplicates(john_smith, [broken, suffix_only, john_smyth], 0.0)
        assert [m.candidate.id for m in matches] == ["demo-4"]

    def test_non_latin_names_not_forced_to_match(self):
        """Different people written in other scripts are not exact matches."""
        ivan = MemorialCandidate(first_name="Иван", last_name="Петров")
        maria = MemorialCandidate(id="x", first_name="Мария", last_name="Сидорова")
        assert find_potential_duplicates(ivan, [maria], 0.99) == []

        li = MemorialCandidate(first_name="李", last_name="娜", birth_date="1950-01-01")
        wang = MemorialCandidate(id="y", first_name="王", last_name="伟", birth_date="1950-01-01")
        assert find_potential_duplicates(li, [wang], 0.99) == []

    def test_non_latin_exact_match(self):
        ivan = MemorialCandidate(first_name="Иван", last_name="Петров", birth_date="1950-01-01")
        saved = MemorialCandidate(id="z", first_name="ИВАН", last_name="петров", birth_date="1950-01-01")
        matches = find_potential_duplicates(ivan, [saved], 0.99)

        assert [m.candidate.id for m in matches] == ["z"]
        assert matches[0].exact_hash_match is True

    def test_empty_pool(self, john_smith):
        assert find_potential_duplicates(john_smith, [], 0.5) == []

    def test_pool_not_mutated(self, john_smith, demo_memorials):
        before = list(demo_memorials)
        find_potential_duplicates(john_smith, demo_memorials, 0.5)
        assert demo_memorials == before

    def test_accepts_generator_pool(self, john_smith, demo_memorials):
        matches = find_potential_duplicates(john_smith, (m for m in demo_memorials), 0.5)
        assert matches[0].candidate.id == "demo-1"


class TestValidation:
    """Invalid input fails before any scoring."""

    @pytest.mark.parametrize("threshold", [-0.01, 1.01, float("nan"), "0.5", None, True])
    def test_invalid_threshold(self, john_smith, threshold):
        finder = DuplicateFinder()
        if threshold is None:
            # None means "use the configured default"
            assert finder.find_potential_duplicates(john_smith, [], threshold) == []
            return
        with pytest.raises(InvalidInputError):
            finder.find_potential_duplicates(john_smith, [], threshold)

    @pytest.mark.parametrize("threshold", [0, 0.0, 1, 1.0])
    def test_threshold_bounds_accepted(self, john_smith, threshold):
        find_potential_duplicates(john_smith, [], threshold)

    @pytest.mark.parametrize("first,last", [
        ("", "Smith"), ("John", ""), ("   ", "Smith"), (None, "Smith"), ("Jr.", "Smith"), ("John", "--"),
    ])
    def test_missing_names(self, first, last):
        candidate = MemorialCandidate(first_name=first, last_name=last)
        with pytest.raises(InvalidInputError):
            find_potential_duplicates(candidate, [], 0.5)

    def test_fails_before_scoring(self, john_smith):
        """The pool is not consumed when validation fails."""
        consumed = []

        def pool():
            consumed.append(True)
            yield john_smith

        with pytest.raises(InvalidInputError):
            find_potential_duplicates(john_smith, pool(), 2.0)
        assert consumed == []

    def test_invalid_input_is_value_error(self, john_smith):
        with pytest.raises(ValueError):
            find_potential_duplicates(john_smith, [], 1.5)


class TestDuplicateMatch:
    """Tests for DuplicateMatch serialization and labels."""

    def test_to_dict(self, john_smith, john_smyth):
        match = find_potential_duplicates(john_smith, [john_smyth], 0.5)[0]
        data = match.to_dict()

        assert data['memorial']['id'] == "demo-4"
        assert data['memorial']['lastName'] == "Smyth"
        assert data['confidence'] == match.score
        assert data['matchedFields'][0] == {'field': 'name', 'similarity': match.matched_fields[0].similarity}
        assert data['exactMatch'] is False
        assert data['label']['level'] == match.label.level.value


class TestConfidenceLabel:
    """Tests for confidence labels."""

    @pytest.mark.parametrize("score,level,color", [
        (1.0, ConfidenceLevel.VERY_HIGH, 'red'),
        (0.9, ConfidenceLevel.VERY_HIGH, 'red'),
        (0.8, ConfidenceLevel.HIGH, 'red'),
        (0.6, ConfidenceLevel.MODERATE, 'yellow'),
        (0.59, ConfidenceLevel.LOW, 'green'),
        (0.0, ConfidenceLevel.LOW, 'green'),
    ])
    def test_levels(self, score, level, color):
        label = get_confidence_label(score)
        assert label.level is level
        assert label.color == color
