"""
Workshop search - synonym-expanded fuzzy matching over weighted fields.
"""
import logging
from typing import Iterable, Optional, Sequence

from ..config import SearchConfig, get_config
from ..models.results import MatchField, SearchResult
from ..models.workshop import Workshop

from .matching import match_strength
from .synonyms import SynonymExpander, tokenize


logger = logging.getLogger(__name__)


class WorkshopSearch:
    """
    Scores workshops against a free-text query.

    Every expanded query token is compared with every token of the name,
    specialty and location fields. Each hit adds strength x field weight to
    the workshop's score.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        expander: Optional[SynonymExpander] = None,
    ):
        self.config = config or get_config().search
        self.expander = expander or SynonymExpander(self.config.synonyms)

    @property
    def field_weights(self) -> dict[MatchField, float]:
        return {
            "name": self.config.name_weight,
            "tag": self.config.tag_weight,
            "location": self.config.location_weight,
        }

    def search(self, query: Optional[str], workshops: Sequence[Workshop]) -> list[SearchResult]:
        """
        Rank workshops by relevance to the query.

        Args:
            query: Raw search box text
            workshops: All candidate workshops

        Returns:
            Workshops with score > 0, best first, capped at max_results.
            A blank query returns every workshop with a neutral score.
        """
        query_tokens = self.expander.expand(query)
        if not query_tokens:
            return [
                SearchResult(workshop=w, score=self.config.neutral_score)
                for w in workshops
            ]

        logger.info(f"Searching {len(workshops)} workshops for {query!r}")

        results = []
        for workshop in workshops:
            result = self.score_workshop(workshop, query_tokens)
            if result.score > 0:
                results.append(result)

        # Stable sort keeps input order for ties
        results.sort(key=lambda r: r.score, reverse=True)
        results = results[: self.config.max_results]

        logger.info(f"Search matched {len(results)} workshops")
        return results

    def score_workshop(self, workshop: Workshop, query_tokens: Iterable[str]) -> SearchResult:
        """Score a single workshop against already expanded query tokens."""
        fields = self._field_tokens(workshop)
        weights = self.field_weights

        score = 0.0
        matches: list[MatchField] = []

        # Sorted so float accumulation order is the same on every run
        for q_token in sorted(query_tokens):
            for field, tokens in fields.items():
                for token in tokens:
                    strength = match_strength(token, q_token, self.config)
                    if strength > 0:
                        score += strength * weights[field]
                        if field not in matches:
                            matches.append(field)

        return SearchResult(workshop=workshop, score=score, matches=matches)

    def _field_tokens(self, workshop: Workshop) -> dict[MatchField, list[str]]:
        """Tokenize the searchable fields of a workshop."""
        tag_tokens = []
        for label in workshop.specialty_labels:
            tag_tokens.extend(tokenize(label))

        return {
            "name": tokenize(workshop.name),
            "tag": tag_tokens,
            "location": tokenize(workshop.location),
        }
