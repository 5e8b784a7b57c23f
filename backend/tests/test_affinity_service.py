"""Tests for the affinity service - weighting and ranking."""

from quotefeed.config import FeedConfig
from quotefeed.services.affinity_service import affinity_service
from quotefeed.services.ledger_service import InteractionRecord

CONFIG = FeedConfig()


def _records(*pairs):
    return [InteractionRecord(interaction_type=t, category_id=c) for t, c in pairs]


def test_example_history():
    """like+view on 5, remix on 7 -> {5: 4, 7: 5}, ranked [7, 5]."""
    affinity = affinity_service.score(_records(("like", 5), ("view", 5), ("remix", 7)), CONFIG)
    assert affinity.scores == {5: 4, 7: 5}
    assert affinity.ranked == [7, 5]


def test_weights_per_type():
    affinity = affinity_service.score(
        _records(("view", 1), ("like", 2), ("share", 3), ("remix", 4)), CONFIG
    )
    assert affinity.scores == {1: 1, 2: 3, 3: 4, 4: 5}


def test_unknown_type_counts_as_one():
    affinity = affinity_service.score(_records(("bookmark", 9), ("view", 9)), CONFIG)
    assert affinity.scores == {9: 2}


def test_order_does_not_change_sum():
    history = _records(("like", 1), ("share", 2), ("view", 1), ("remix", 2))
    forward = affinity_service.score(history, CONFIG)
    backward = affinity_service.score(list(reversed(history)), CONFIG)
    assert forward == backward


def test_ties_ranked_by_category_id():
    affinity = affinity_service.score(_records(("like", 8), ("like", 3), ("like", 5)), CONFIG)
    assert affinity.ranked == [3, 5, 8]


def test_empty_history():
    affinity = affinity_service.score([], CONFIG)
    assert affinity.scores == {}
    assert affinity.ranked == []
    assert affinity.is_empty


def test_missing_category_is_skipped():
    affinity = affinity_service.score(_records(("like", None), ("view", 2)), CONFIG)
    assert affinity.scores == {2: 1}


def test_custom_weights():
    config = FeedConfig(view_weight=2, like_weight=10)
    affinity = affinity_service.score(_records(("view", 1), ("like", 2)), config)
    assert affinity.scores == {1: 2, 2: 10}
    assert affinity.ranked == [2, 1]


def test_zero_weight_leaves_no_affinity():
    config = FeedConfig(view_weight=0)
    affinity = affinity_service.score(_records(("view", 1), ("view", 1)), config)
    assert affinity.is_empty
