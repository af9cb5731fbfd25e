"""Pipeline stages for workshop discovery."""

from .geo import distance, distances_from, radius_from_zoom, within_bounds, format_distance
from .synonyms import SynonymExpander, tokenize
from .matching import edit_distance, match_strength
from .search import WorkshopSearch
from .filter import WorkshopFilter, sort_workshops
from .orchestrator import discover, run_discovery

__all__ = [
    "distance",
    "distances_from",
    "radius_from_zoom",
    "within_bounds",
    "format_distance",
    "SynonymExpander",
    "tokenize",
    "edit_distance",
    "match_strength",
    "WorkshopSearch",
    "WorkshopFilter",
    "sort_workshops",
    "discover",
    "run_discovery",
]
