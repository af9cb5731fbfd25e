"""
Synonym expansion for search queries.
"""
import logging
from types import MappingProxyType
from typing import Mapping, Optional


logger = logging.getLogger(__name__)


def tokenize(text: Optional[str]) -> list[str]:
    """Lower-case and split on whitespace."""
    return (text or "").lower().split()


class SynonymExpander:
    """
    Expands query tokens with a fixed synonym table.

    Lookup is literal and one level deep: each query token pulls in its own
    table entry only. The table is not assumed to be symmetric.
    """

    def __init__(self, table: Mapping[str, tuple[str, ...]]):
        self.table = MappingProxyType(
            {key.lower(): tuple(s.lower() for s in syns) for key, syns in table.items()}
        )

    def expand(self, query: Optional[str]) -> frozenset[str]:
        """
        Expand a raw query into the set of tokens to match.

        Returns an empty set for a blank query.
        """
        tokens = tokenize(query)
        expanded = set(tokens)
        for token in tokens:
            expanded.update(self.table.get(token, ()))

        if len(expanded) > len(tokens):
            logger.debug(f"Expanded {tokens} to {sorted(expanded)}")
        return frozenset(expanded)
