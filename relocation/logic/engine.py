"""
Relocation Engine

Main orchestrator that combines all scoring components into a single pipeline.
This is the primary entry point for generating country matches.
"""

import logging
import time
import uuid
from typing import Any, Dict, Iterable, List, Optional

from .aggregator import aggregate_score, score_country, tax_tiebreak
from .catalog import get_country, load_catalog
from .constants import (
    ENGINE_VERSION,
    MESSAGE_NO_WINNERS,
    MESSAGE_SUCCESS,
)
from .contracts import (
    CountryRecord,
    RankingResult,
    RecommendationOutput,
    RelocationProfile,
    ScoredCountry,
)
from .dimension_scorers import score_dimensions
from .disqualifier import check_scored
from .ranker import rank_disqualified, rank_winners, split_candidates
from .weights import compute_weights

logger = logging.getLogger(__name__)


class RankingError(RuntimeError):
    """Unexpected failure while scoring a specific country."""

    def __init__(self, code: str, cause: Exception):
        super().__init__(f"Failed to score country {code}: {cause}")
        self.code = code
        self.cause = cause


class UnknownCountryError(LookupError):
    """Requested country code is not in the catalog."""

    def __init__(self, code: str):
        super().__init__(f"Unknown country code: {code}")
        self.code = code


class RelocationEngine:
    """
    Main engine that orchestrates the matching pipeline.

    Pipeline flow:
    1. Weights - Derive one weight vector for the profile
    2. Dimension Scoring - Score each dimension of every country
    3. Aggregation - Weighted mean plus tax tie-break
    4. Disqualification - Apply hard rules
    5. Ranking - Order winners and near misses
    6. Advisory merge - Optional reordering by the external advisor
    """

    def __init__(self, catalog: Optional[Iterable[CountryRecord]] = None):
        """
        Initialize the engine.

        Args:
            catalog: Countries to rank. If None, uses the bundled catalog.
        """
        self.catalog = tuple(catalog) if catalog is not None else load_catalog()
        self.version = ENGINE_VERSION

    def rank(self, profile: RelocationProfile) -> RankingResult:
        """
        Run the numeric pipeline only.

        Args:
            profile: Canonical user profile

        Returns:
            RankingResult with ranked winners and the top disqualified

        Raises:
            RankingError: a country could not be scored
        """
        weights = compute_weights(profile)

        scored: List[ScoredCountry] = []
        unscored = 0
        for country in self.catalog:
            try:
                scored_country = score_country(profile, country, weights)
            except Exception as e:
                logger.error(f"Scoring failed for {country.code}: {e}")
                raise RankingError(country.code, e) from e

            if scored_country is None:
                logger.debug(f"No score for {country.code}, skipping")
                unscored += 1
                continue

            scored.append(scored_country)

        winners, disqualified = split_candidates(profile, scored)

        result = RankingResult(
            winners=rank_winners(winners),
            disqualified_top=rank_disqualified(disqualified),
            total_evaluated=len(self.catalog),
            total_disqualified=len(disqualified),
            total_unscored=unscored,
        )

        logger.info(
            f"Ranked {len(result.winners)} winners, "
            f"{result.total_disqualified} disqualified, {unscored} unscored"
        )
        return result

    def recommend(
        self,
        profile: RelocationProfile,
        advisor=None
    ) -> RecommendationOutput:
        """
        Rank countries and let the advisor reorder the winners.

        Args:
            profile: Canonical user profile
            advisor: Optional AdvisoryClient; without one the numeric order
                is kept

        Returns:
            RecommendationOutput
        """
        from ..ai.reranker import rerank_winners

        start_time = time.perf_counter()
        request_id = uuid.uuid4().hex

        result = self.rank(profile)

        if not result.winners:
            return RecommendationOutput(
                request_id=request_id,
                ok=True,
                message=MESSAGE_NO_WINNERS,
                disqualified_top=result.disqualified_top,
                total_evaluated=result.total_evaluated,
                total_disqualified=result.total_disqualified,
                processing_time_ms=_elapsed_ms(start_time),
                engine_version=self.version,
            )

        outcome = rerank_winners(profile, result.winners, result.disqualified_top, advisor)
        best_match = outcome.winners[0]

        return RecommendationOutput(
            request_id=request_id,
            ok=True,
            message=MESSAGE_SUCCESS,
            winners=outcome.winners,
            disqualified_top=result.disqualified_top,
            best_match=best_match,
            simple_score=best_match.total_score,
            merge_source=outcome.source,
            fallback_reason=outcome.fallback_reason,
            advisory_notes=outcome.notes,
            disqualified_notes=outcome.disqualified_notes,
            total_evaluated=result.total_evaluated,
            total_disqualified=result.total_disqualified,
            processing_time_ms=_elapsed_ms(start_time),
            engine_version=self.version,
        )

    def score_single_country(
        self,
        profile: RelocationProfile,
        code: str
    ) -> Dict[str, Any]:
        """
        Score a single country for a profile.

        Useful for getting detailed scoring on a country the user is
        curious about, including ones the ranking removed.

        Args:
            profile: Canonical user profile
            code: Country code (case-insensitive)

        Returns:
            Dict with scoring details

        Raises:
            UnknownCountryError: code is not in the catalog
        """
        country = get_country(self.catalog, code)
        if country is None:
            raise UnknownCountryError(code)

        weights = compute_weights(profile)
        breakdown, explanations = score_dimensions(profile, country)
        base_score = aggregate_score(breakdown, weights, profile)

        reason = None
        if base_score is not None:
            reason = check_scored(profile, ScoredCountry(
                country=country,
                breakdown=breakdown,
                explanations=explanations,
                base_score=base_score,
            ))

        return {
            "code": country.code,
            "name": country.name,
            "base_score": base_score,
            "tax_tiebreak": tax_tiebreak(breakdown, profile),
            "is_disqualified": reason is not None,
            "disqualification_reason": reason,
            "dimensions": {
                dim: {
                    "score": value,
                    "weight": weights.get(dim, 0.0),
                    "weighted_score": value * weights.get(dim, 0.0),
                    "explanation": explanations.get(dim, ""),
                }
                for dim, value in breakdown.items()
            },
        }


# Convenience function for simple usage
def get_matches(
    profile: RelocationProfile,
    catalog: Optional[Iterable[CountryRecord]] = None,
    advisor=None
) -> RecommendationOutput:
    """
    Convenience function to get country matches.

    Args:
        profile: Canonical user profile
        catalog: Optional catalog override
        advisor: Optional AdvisoryClient

    Returns:
        RecommendationOutput
    """
    engine = RelocationEngine(catalog)
    return engine.recommend(profile, advisor=advisor)


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)

