"""
Configuration and environment handling for workshop discovery.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables
load_dotenv()


DEFAULT_SYNONYMS: dict[str, tuple[str, ...]] = {
    "tyre": ("tire", "wheel", "rim", "alignment", "balancing"),
    "tire": ("tyre", "wheel", "rim", "alignment", "balancing"),
    "oil": ("lube", "lubricant", "service", "maintenance"),
    "maintenance": ("service", "oil", "checkup", "inspection"),
    "aircond": ("air", "conditioning", "cool", "gas", "ac", "a/c"),
    "ac": ("air", "conditioning", "cool", "gas", "aircond"),
    "paint": ("body", "scratch", "dent", "collision", "respray"),
    "body": ("paint", "scratch", "dent", "collision", "respray"),
    "battery": ("power", "start", "jump"),
    "brake": ("pad", "disc", "stop", "abs"),
    "engine": ("motor", "overhaul", "repair"),
    "shop": ("workshop", "center", "centre", "garage"),
}

# Service-grid slugs -> specialty label used for category browsing
DEFAULT_CATEGORY_SLUGS: dict[str, str] = {
    "engine-oil": "Engine",
    "tires": "Tires",
    "battery": "Battery",
    "air-cond": "Air-cond",
    "diagnostics": "General",
    "car-wash": "Wash",
    "towing": "Towing",
    "transmission": "Transmission",
    "brakes": "Brakes",
    "suspension": "Suspension",
    "body-paint": "Body Paint",
    "major-service": "Engine",
}


class SearchConfig(BaseModel):
    """Text search scoring configuration."""
    model_config = ConfigDict(frozen=True)

    name_weight: float = Field(default=3.0)
    tag_weight: float = Field(default=2.0)
    location_weight: float = Field(default=1.0)
    max_results: int = Field(
        default_factory=lambda: int(os.getenv("DISCOVERY_MAX_RESULTS", "10")),
        ge=1,
        description="Cap on scored search results",
    )
    exact_strength: float = Field(default=1.0)
    substring_strength: float = Field(default=0.8)
    fuzzy_strength: float = Field(default=0.7)
    long_token_length: int = Field(
        default=5,
        description="Tokens longer than this tolerate two edits instead of one",
    )
    neutral_score: float = Field(default=1.0, description="Score given to every workshop for a blank query")
    synonyms: dict[str, tuple[str, ...]] = Field(default_factory=lambda: dict(DEFAULT_SYNONYMS))


class FilterConfig(BaseModel):
    """Filter engine configuration."""
    model_config = ConfigDict(frozen=True)

    price_sentinel: float = Field(
        default=1000.0,
        description="max_price at or above this means 'no upper bound' (slider shows 1000+)",
    )
    category_slugs: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CATEGORY_SLUGS))


class GeoConfig(BaseModel):
    """Geodesy and map radius configuration."""
    model_config = ConfigDict(frozen=True)

    earth_radius_km: float = Field(default=6371.0)
    base_radius_m: float = Field(default=40000.0, description="Search radius at the reference zoom")
    reference_zoom: float = Field(default=8.0)
    min_radius_m: float = Field(default=500.0)
    max_radius_m: float = Field(default=50000.0)
    default_radius_m: float = Field(default=5000.0, description="Radius before the map reports one")
    fallback_lat: float = Field(default=3.1073)
    fallback_lng: float = Field(default=101.6067)


class Config(BaseModel):
    """Main configuration."""
    model_config = ConfigDict(frozen=True)

    search: SearchConfig = Field(default_factory=SearchConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    geo: GeoConfig = Field(default_factory=GeoConfig)

    log_level: str = Field(default_factory=lambda: os.getenv("DISCOVERY_LOG_LEVEL", "INFO"))


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a basic root handler for hosts that don't configure logging themselves."""
    level_name = (level or get_config().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
