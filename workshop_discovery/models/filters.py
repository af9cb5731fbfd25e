"""
Filter models - typed filter criteria from the filter sheet.
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


SortOption = Literal["nearest", "rating", "price_low"]


class FilterCriteria(BaseModel):
    """
    Filter criteria for one discovery request.
    Every field is optional; an absent field means no constraint.
    """
    model_config = ConfigDict(frozen=True)

    categories: list[str] = Field(
        default_factory=list,
        description="Selected services; a workshop must match at least one",
    )
    min_rating: Optional[float] = Field(default=None)
    min_price: Optional[float] = Field(default=None)
    max_price: Optional[float] = Field(
        default=None,
        description="Upper price bound; values at or above the price sentinel mean unbounded",
    )
    sort: Optional[SortOption] = Field(
        default=None,
        description="Ordering chosen in the filter sheet; None keeps pipeline order",
    )

    @property
    def is_empty(self) -> bool:
        """True when no constraint or ordering is set."""
        return (
            not self.categories
            and self.min_rating is None
            and self.min_price is None
            and self.max_price is None
            and self.sort is None
        )
