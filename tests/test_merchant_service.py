"""Tests for merchant key normalization and clustering."""

from datetime import date

from subwatch.services.merchant_service import (
    canonical_description,
    comparable_form,
    cluster_charges,
    normalize,
)
from tests.helpers import charge


class TestCanonicalDescription:
    """Test description clean-up."""

    def test_trims_and_lowercases(self):
        """Outer whitespace is dropped and case folded."""
        assert canonical_description("  NETFLIX.COM  ") == "netflix.com"

    def test_collapses_inner_whitespace(self):
        """Runs of spaces and tabs become a single space."""
        assert canonical_description("NETFLIX \t  INC") == "netflix inc"


class TestComparableForm:
    """Test the form used for similarity scoring."""

    def test_strips_punctuation(self):
        assert comparable_form(" NETFLIX.COM ") == "netflix com"
        assert comparable_form("AMZN*MKTP  US") == "amzn mktp us"


class TestNormalize:
    """Test merchant key assignment."""

    def test_mints_new_key(self):
        """An unseen merchant becomes its own key."""
        known = set()
        assert normalize("SPOTIFY USA", known) == "spotify usa"
        assert known == {"spotify usa"}

    def test_exact_match_reused(self):
        """Case and spacing differences map to the existing key."""
        known = {"netflix"}
        assert normalize("  Netflix ", known) == "netflix"
        assert known == {"netflix"}

    def test_near_duplicate_merges(self):
        """A near-duplicate description reuses the earlier key."""
        known = set()
        first = normalize("SPOTIFY USA", known)
        second = normalize("SPOTIFY USA 2", known)
        assert first == second == "spotify usa"
        assert len(known) == 1

    def test_punctuation_variants_merge(self):
        """"NETFLIX.COM" and "NETFLIX INC" share one key."""
        known = set()
        assert normalize("NETFLIX.COM", known) == "netflix.com"
        assert normalize("NETFLIX INC", known) == "netflix.com"
        assert known == {"netflix.com"}

    def test_distinct_merchants_never_merge(self):
        """Unrelated merchants get separate keys."""
        known = set()
        assert normalize("SPOTIFY", known) == "spotify"
        assert normalize("NETFLIX", known) == "netflix"
        assert known == {"spotify", "netflix"}

    def test_threshold_is_configurable(self):
        """A strict threshold keeps near-duplicates apart."""
        known = {"spotify usa"}
        assert normalize("SPOTIFY USA 2", known, threshold=1.0) == "spotify usa 2"
        assert known == {"spotify usa", "spotify usa 2"}


class TestClusterCharges:
    """Test grouping of charges into merchant clusters."""

    def test_groups_chronologically(self):
        """Clusters follow first-seen order and hold charges oldest first."""
        clusters = cluster_charges([
            charge("SPOTIFY USA 2", "-9.99", date(2024, 3, 1)),
            charge("SPOTIFY USA", "-9.99", date(2024, 1, 1)),
            charge("NETFLIX", "-15.49", date(2024, 2, 1)),
        ])

        assert [c.key for c in clusters] == ["spotify usa", "netflix"]
        assert [c.date for c in clusters[0].charges] == [date(2024, 1, 1), date(2024, 3, 1)]

    def test_key_comes_from_earliest_charge(self):
        """The oldest description names the cluster regardless of input order."""
        clusters = cluster_charges([
            charge("SPOTIFY USA", "-9.99", date(2024, 2, 1)),
            charge("SPOTIFY USA 2", "-9.99", date(2024, 1, 1)),
        ])

        assert len(clusters) == 1
        assert clusters[0].key == "spotify usa 2"

    def test_same_day_keeps_input_order(self):
        """Charges on the same date stay in the order they were given."""
        clusters = cluster_charges([
            charge("GYM", "-40.00", date(2024, 1, 1)),
            charge("GYM", "-12.00", date(2024, 1, 1)),
        ])

        assert [str(c.amount) for c in clusters[0].charges] == ["-40.00", "-12.00"]

    def test_empty_input(self):
        """No charges, no clusters."""
        assert cluster_charges([]) == []
