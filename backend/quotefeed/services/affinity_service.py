"""Affinity service - turns interaction history into ranked category affinity."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from quotefeed.config import FeedConfig
from quotefeed.services.ledger_service import InteractionRecord


@dataclass(frozen=True)
class CategoryAffinity:
    """Per-request affinity. A category missing from `scores` has zero affinity."""
    scores: dict[int, int] = field(default_factory=dict)
    ranked: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.ranked


class AffinityService:
    @staticmethod
    def rank(scores: dict[int, int]) -> list[int]:
        """Category ids by descending score, ties by ascending id."""
        return sorted(scores, key=lambda category_id: (-scores[category_id], category_id))

    @staticmethod
    def score(records: Iterable[InteractionRecord], config: FeedConfig) -> CategoryAffinity:
        """Sum interaction weights per category.

        Every record in the window counts the same regardless of age; recency
        only decides which records are in the window.
        """
        scores: dict[int, int] = {}
        for record in records:
            if record.category_id is None:
                continue
            points = config.weight_for(record.interaction_type)
            scores[record.category_id] = scores.get(record.category_id, 0) + points

        # Zero-weight types leave no affinity behind
        scores = {category_id: total for category_id, total in scores.items() if total > 0}
        return CategoryAffinity(scores=scores, ranked=AffinityService.rank(scores))


affinity_service = AffinityService()
