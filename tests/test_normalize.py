"""
Tests for location normalization.
"""

import pytest
from resumescore.normalize import normalize_location, same_location


class TestNormalizeLocation:
    def test_lower_cases_and_collapses_separators(self):
        assert normalize_location("  San_Francisco ") == "san francisco"
        assert normalize_location("New - York") == "new york"

    @pytest.mark.parametrize("variant,canonical", [
        ("Bengaluru", "bangalore"),
        ("Bombay", "mumbai"),
        ("New Delhi", "delhi"),
        ("Gurugram", "gurgaon"),
        ("Work From Home", "remote"),
        ("WFH", "remote"),
    ])
    def test_aliases(self, variant, canonical):
        assert normalize_location(variant) == canonical

    def test_unknown_place_passes_through(self):
        assert normalize_location("Lisbon") == "lisbon"


class TestSameLocation:
    def test_spelling_variants(self):
        assert same_location("Bengaluru", "Bangalore")
        assert same_location("madras", "Chennai")

    def test_different_places(self):
        assert not same_location("Pune", "Bangalore")

    def test_region_suffix_is_significant(self):
        assert not same_location("Bangalore, India", "Bangalore")
