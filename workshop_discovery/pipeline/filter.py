"""
Workshop filter - category, rating and price constraints.
"""
import logging
from typing import Optional, Sequence

from ..config import FilterConfig, get_config
from ..models.filters import FilterCriteria, SortOption
from ..models.workshop import Workshop


logger = logging.getLogger(__name__)


class WorkshopFilter:
    """
    Applies the filter sheet's constraints to a list of workshops.

    All constraints are ANDed; the category list is ORed internally.
    Input order is preserved.
    """

    def __init__(self, config: Optional[FilterConfig] = None):
        self.config = config or get_config().filters

    def filter(
        self,
        workshops: Sequence[Workshop],
        criteria: Optional[FilterCriteria] = None,
    ) -> list[Workshop]:
        """
        Filter workshops by criteria.

        Args:
            workshops: Workshops to filter
            criteria: Filter criteria; None means no constraints

        Returns:
            Workshops passing every constraint, in input order
        """
        if criteria is None or criteria.is_empty or not workshops:
            return list(workshops)

        logger.info(f"Filtering {len(workshops)} workshops")

        categories = [c.lower() for c in criteria.categories if c]
        max_price = self.effective_max_price(criteria)

        filtered = []
        for workshop in workshops:
            # Category: any selected category in any specialty
            if categories and not self._matches_category(workshop, categories):
                continue

            # Rating
            if criteria.min_rating is not None and workshop.rating < criteria.min_rating:
                continue

            # Price
            if criteria.min_price is not None and workshop.price < criteria.min_price:
                continue
            if max_price is not None and workshop.price > max_price:
                continue

            filtered.append(workshop)

        logger.info(f"After filters: {len(filtered)} workshops")
        return filtered

    def effective_max_price(self, criteria: FilterCriteria) -> Optional[float]:
        """
        The upper price bound actually enforced.

        The price slider tops out at the sentinel and shows "1000+", so a
        max_price at or above it means there is no upper bound.
        """
        if criteria.max_price is None or criteria.max_price >= self.config.price_sentinel:
            return None
        return criteria.max_price

    def _matches_category(self, workshop: Workshop, categories: list[str]) -> bool:
        labels = [label.lower() for label in workshop.specialty_labels]
        return any(cat in label for cat in categories for label in labels)

    def for_category(self, workshops: Sequence[Workshop], slug: str) -> list[Workshop]:
        """
        Workshops listed under a service-grid category.

        The slug is mapped to a specialty label (unknown slugs are used as
        is) which must equal one of the workshop's specialties. "all" lists
        everything.
        """
        if not slug or slug.lower() == "all":
            return list(workshops)

        target = self.config.category_slugs.get(slug.lower(), slug).lower()
        return [
            w for w in workshops
            if any(label.lower() == target for label in w.specialty_labels)
        ]


def sort_workshops(workshops: Sequence[Workshop], option: Optional[SortOption]) -> list[Workshop]:
    """
    Order workshops by the filter sheet's sort choice.

    "rating" puts the best rated first, "price_low" the cheapest first.
    "nearest" and None keep the incoming order, which is already by
    distance when the user's location is known. Sorts are stable.
    """
    if option == "rating":
        return sorted(workshops, key=lambda w: w.rating, reverse=True)
    if option == "price_low":
        return sorted(workshops, key=lambda w: w.price)
    return list(workshops)
