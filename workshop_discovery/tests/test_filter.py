"""
Tests for workshop filtering.
"""
import pytest

from workshop_discovery.config import FilterConfig
from workshop_discovery.models.filters import FilterCriteria
from workshop_discovery.models.workshop import Workshop
from workshop_discovery.pipeline.filter import WorkshopFilter, sort_workshops


class TestWorkshopFilter:
    """Tests for WorkshopFilter."""

    @pytest.fixture
    def filter_obj(self) -> WorkshopFilter:
        """Filter with default configuration."""
        return WorkshopFilter(FilterConfig())

    @pytest.fixture
    def sample_workshops(self) -> list[Workshop]:
        """Create sample workshops for testing."""
        return [
            Workshop(
                id="w1",
                name="Ah Seng Auto Services",
                specialties=["Honda Specialist", "Air-cond", "Engine", "Brakes"],
                rating=4.8,
                price=120,
            ),
            Workshop(
                id="w2",
                name="Tyre Pro",
                specialties=["Tires & Rims", "Alignment", "Balancing", "Suspension"],
                rating=4.5,
                price=80,
            ),
            Workshop(
                id="w3",
                name="Engine Masters",
                specialties=["Engine", "Major Service", "Transmission"],
                rating=4.2,
                price=350,
            ),
            Workshop(
                id="w4",
                name="Shine Body Works",
                specialties=['{"name": "Body Paint", "price": "RM 300"}', "Wash"],
                rating=3.9,
                price=1500,
            ),
        ]

    def test_sort_only_criteria_filters_nothing(self, filter_obj, sample_workshops):
        """Test that criteria carrying only a sort choice keeps every workshop in order."""
        criteria = FilterCriteria(sort="rating")

        assert criteria.is_empty is False
        assert filter_obj.filter(sample_workshops, criteria) == sample_workshops

    def test_no_criteria_keeps_everything(self, filter_obj, sample_workshops):
        """Test that empty criteria is a pass-through."""
        assert filter_obj.filter(sample_workshops, FilterCriteria()) == sample_workshops
        assert filter_obj.filter(sample_workshops, None) == sample_workshops

    def test_category_or_logic(self, filter_obj, sample_workshops):
        """Test that any selected category is enough."""
        criteria = FilterCriteria(categories=["Brakes", "Suspension"])

        result = filter_obj.filter(sample_workshops, criteria)

        assert [w.id for w in result] == ["w1", "w2"]

    def test_category_substring_case_insensitive(self, filter_obj, sample_workshops):
        """Test that categories match case-insensitively inside specialty text."""
        criteria = FilterCriteria(categories=["tires"])

        result = filter_obj.filter(sample_workshops, criteria)

        assert [w.id for w in result] == ["w2"]

    def test_category_matches_structured_tag_name(self, filter_obj, sample_workshops):
        """Test that JSON-encoded specialties match on their display name."""
        result = filter_obj.filter(sample_workshops, FilterCriteria(categories=["body paint"]))

        assert [w.id for w in result] == ["w4"]

    def test_min_rating(self, filter_obj, sample_workshops):
        """Test that ratings strictly below the minimum are excluded."""
        result = filter_obj.filter(sample_workshops, FilterCriteria(min_rating=4.5))

        assert [w.id for w in result] == ["w1", "w2"]

    def test_stricter_rating_never_grows_result(self, filter_obj, sample_workshops):
        """Test that adding a minimum rating never increases the result size."""
        unconstrained = filter_obj.filter(sample_workshops, FilterCriteria())
        for min_rating in [0, 3.9, 4.0, 4.5, 4.8, 5.0]:
            constrained = filter_obj.filter(sample_workshops, FilterCriteria(min_rating=min_rating))
            assert len(constrained) <= len(unconstrained)

    def test_min_price(self, filter_obj, sample_workshops):
        """Test that a minimum price is honored directly."""
        result = filter_obj.filter(sample_workshops, FilterCriteria(min_price=120))

        assert [w.id for w in result] == ["w1", "w3", "w4"]

    def test_max_price(self, filter_obj, sample_workshops):
        """Test that prices above the maximum are excluded."""
        result = filter_obj.filter(sample_workshops, FilterCriteria(max_price=100))

        assert [w.id for w in result] == ["w2"]

    @pytest.mark.parametrize("max_price", [1000, 1000.0, 2500])
    def test_max_price_sentinel_is_unbounded(self, filter_obj, sample_workshops, max_price):
        """Test that max_price at or above 1000 excludes nothing."""
        result = filter_obj.filter(sample_workshops, FilterCriteria(max_price=max_price))

        assert result == sample_workshops

    def test_max_price_just_below_sentinel(self, filter_obj, sample_workshops):
        """Test that 999 is a real upper bound."""
        result = filter_obj.filter(sample_workshops, FilterCriteria(max_price=999))

        assert "w4" not in [w.id for w in result]

    def test_sentinel_is_configurable(self, sample_workshops):
        """Test that the sentinel comes from configuration."""
        filter_obj = WorkshopFilter(FilterConfig(price_sentinel=100))

        result = filter_obj.filter(sample_workshops, FilterCriteria(max_price=100))

        assert len(result) == 4

    def test_constraints_are_anded(self, filter_obj, sample_workshops):
        """Test that every constraint must hold."""
        criteria = FilterCriteria(categories=["Engine"], min_rating=4.5, max_price=200)

        result = filter_obj.filter(sample_workshops, criteria)

        assert [w.id for w in result] == ["w1"]

    def test_empty_workshops_returns_empty(self, filter_obj):
        """Test that empty input returns empty output."""
        assert filter_obj.filter([], FilterCriteria(min_rating=4)) == []

    def test_spec_example_prices(self, filter_obj):
        """Test the sentinel against the tyre example workshops."""
        workshops = [
            Workshop(id="ali", name="Ali's Tyre Shop", specialties=["Tires"], rating=4.5, price=80),
            Workshop(id="best", name="Best Garage", specialties=["Engine"], rating=4.0, price=150),
        ]

        assert len(filter_obj.filter(workshops, FilterCriteria(max_price=1000))) == 2
        assert [w.id for w in filter_obj.filter(workshops, FilterCriteria(max_price=100))] == ["ali"]


class TestCategoryBrowse:
    """Tests for service-grid category listing."""

    @pytest.fixture
    def workshops(self) -> list[Workshop]:
        return [
            Workshop(id="w1", specialties=["Engine", "Brakes"]),
            Workshop(id="w2", specialties=["Tires & Rims"]),
            Workshop(id="w3", specialties=["Engine Tuning"]),
            Workshop(id="w4", specialties=["Towing"]),
        ]

    def test_slug_maps_to_label(self, workshops):
        """Test that a slug maps to a specialty that must match exactly."""
        result = WorkshopFilter(FilterConfig()).for_category(workshops, "engine-oil")

        assert [w.id for w in result] == ["w1"]

    def test_unknown_slug_used_verbatim(self, workshops):
        """Test that unmapped slugs are matched as specialty names."""
        result = WorkshopFilter(FilterConfig()).for_category(workshops, "Tires & Rims")

        assert [w.id for w in result] == ["w2"]

    def test_all(self, workshops):
        """Test that 'all' lists every workshop."""
        assert len(WorkshopFilter(FilterConfig()).for_category(workshops, "all")) == 4


class TestSortWorkshops:
    """Tests for the filter sheet's sort options."""

    @pytest.fixture
    def workshops(self) -> list[Workshop]:
        return [
            Workshop(id="a", rating=4.0, price=200),
            Workshop(id="b", rating=4.8, price=90),
            Workshop(id="c", rating=4.0, price=90),
        ]

    def test_rating(self, workshops):
        """Test highest rating first with stable ties."""
        assert [w.id for w in sort_workshops(workshops, "rating")] == ["b", "a", "c"]

    def test_price_low(self, workshops):
        """Test cheapest first with stable ties."""
        assert [w.id for w in sort_workshops(workshops, "price_low")] == ["b", "c", "a"]

    @pytest.mark.parametrize("option", ["nearest", None])
    def test_keeps_order(self, workshops, option):
        """Test that nearest and None keep the incoming order."""
        assert [w.id for w in sort_workshops(workshops, option)] == ["a", "b", "c"]
