"""
Workshop models - the candidate entity and its specialty tags.
"""
import json
import logging
import math
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from .geo import Coordinates


logger = logging.getLogger(__name__)


class PlainTag(BaseModel):
    """A specialty stored as plain text, e.g. "Air-cond"."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str

    @property
    def label(self) -> str:
        return self.text


class StructuredTag(BaseModel):
    """A specialty stored as a JSON object, e.g. '{"name": "Engine", "price": "RM 80"}'."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    name: str
    raw: str

    @property
    def label(self) -> str:
        return self.name


Specialty = Union[PlainTag, StructuredTag]


def parse_specialty(raw: Optional[str]) -> Specialty:
    """
    Resolve a raw specialty tag into its display form.

    Tags that start with "{" are treated as serialized objects and their
    ``name`` (or ``NAME``) field is used. Anything that fails to parse, or
    parses to something without a name, falls back to the raw text.
    """
    text = raw or ""
    if not text.startswith("{"):
        return PlainTag(text=text)

    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        logger.debug(f"Specialty tag is not valid JSON, using raw text: {text[:80]!r}")
        return PlainTag(text=text)

    if isinstance(parsed, dict):
        name = parsed.get("name") or parsed.get("NAME")
        if isinstance(name, str) and name:
            return StructuredTag(name=name, raw=text)

    return PlainTag(text=text)


def _parse_number(v: Any) -> float:
    """Parse a rating or price that may arrive as text ("RM 80", "4.5", "1,200")."""
    if v is None or isinstance(v, bool):
        return 0.0
    if isinstance(v, (int, float)):
        try:
            number = float(v)
        except OverflowError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    if isinstance(v, str):
        # Remove common formatting: "RM 80", "1,200", "80+"
        cleaned = v.replace(" ", "").replace(",", "").replace("RM", "").replace("rm", "").rstrip("+")
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    return 0.0


class Workshop(BaseModel):
    """
    A workshop as supplied by the host's data layer.
    The discovery pipeline only ever reads these.
    """
    id: str
    name: str = ""
    specialties: list[str] = Field(default_factory=list)
    location: str = ""
    rating: float = 0.0
    price: float = Field(default=0.0, description="Starting price")
    lat: Optional[float] = None
    lng: Optional[float] = None

    # Display-only fields carried through to results
    address: Optional[str] = None
    reviews: int = 0
    is_verified: bool = False

    _specialty_tags: tuple[Specialty, ...] = PrivateAttr(default=())

    @field_validator("rating", "price", mode="before")
    @classmethod
    def parse_number(cls, v: Any) -> float:
        """Parse numeric fields from various formats."""
        return _parse_number(v)

    @field_validator("specialties", mode="before")
    @classmethod
    def drop_empty_specialties(cls, v: Any) -> list[str]:
        """Backend rows sometimes carry null or empty tags."""
        if not isinstance(v, (list, tuple)):
            return []
        return [str(tag) for tag in v if tag]

    @field_validator("name", "location", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else v

    def model_post_init(self, __context: Any) -> None:
        """Resolve specialty tags once so matching never re-parses them."""
        self._specialty_tags = tuple(parse_specialty(tag) for tag in self.specialties)

    @property
    def specialty_tags(self) -> tuple[Specialty, ...]:
        return self._specialty_tags

    @property
    def specialty_labels(self) -> list[str]:
        """Display names of all specialties."""
        return [tag.label for tag in self._specialty_tags]

    @property
    def coordinates(self) -> Optional[Coordinates]:
        """Workshop position, or None when it can't be placed on the map."""
        if self.lat is None or self.lng is None:
            return None
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            return None
        return Coordinates(lat=self.lat, lng=self.lng)
