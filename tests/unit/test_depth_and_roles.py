from __future__ import annotations

from collections import Counter

import pytest

from modules.dungeon.errors import DisconnectedGraphError, DungeonError
from modules.dungeon.gen.classify import classify_rooms
from modules.dungeon.gen.depth import label_depths, select_boss
from modules.dungeon.gen.random import get_rng
from modules.dungeon.spec import RoomRole


def test_chain_levels_increase_by_one() -> None:
    graph = {0: {1}, 1: {0, 2}, 2: {1, 3}, 3: {2}}
    assert label_depths(graph) == [1, 2, 3, 4]


def test_levels_are_breadth_first_distances() -> None:
    graph = {0: {1, 2}, 1: {0, 3}, 2: {0}, 3: {1}}
    assert label_depths(graph) == [1, 2, 2, 3]


def test_start_index_other_than_zero() -> None:
    graph = {0: {1}, 1: {0, 2}, 2: {1}}
    assert label_depths(graph, start_index=2) == [3, 2, 1]


def test_disconnected_graph_raises_with_unreachable_rooms() -> None:
    graph = {0: {1}, 1: {0}, 2: set(), 3: set()}
    with pytest.raises(DisconnectedGraphError) as info:
        label_depths(graph)
    assert info.value.unreachable == (2, 3)
    assert isinstance(info.value, DungeonError)


def test_room_count_beyond_graph_is_disconnected() -> None:
    with pytest.raises(DisconnectedGraphError):
        label_depths({0: set()}, room_count=2)


def test_empty_graph_has_no_levels() -> None:
    assert label_depths({}) == []


def test_single_room_is_level_one() -> None:
    assert label_depths({0: set()}) == [1]


def test_boss_is_deepest_and_lowest_index_wins_ties() -> None:
    assert select_boss([1, 2, 3, 2]) == 2
    assert select_boss([1, 3, 2, 3]) == 1
    assert select_boss([1]) == 0


def test_select_boss_rejects_empty() -> None:
    with pytest.raises(ValueError):
        select_boss([])


def test_classification_fixes_start_and_boss() -> None:
    roles = classify_rooms(6, 4, get_rng(5))
    assert roles[0] is RoomRole.START
    assert roles[4] is RoomRole.BOSS
    assert Counter(roles)[RoomRole.START] == 1
    assert Counter(roles)[RoomRole.BOSS] == 1
    assert set(roles[1:4] + roles[5:]) <= {RoomRole.COMMON, RoomRole.TREASURE}


def test_single_room_dungeon_is_only_start() -> None:
    assert classify_rooms(1, 0, get_rng(0)) == [RoomRole.START]


@pytest.mark.parametrize(("chance", "expected"), [(0.0, RoomRole.COMMON), (1.0, RoomRole.TREASURE)])
def test_treasure_chance_extremes(chance: float, expected: RoomRole) -> None:
    roles = classify_rooms(10, 9, get_rng(1), treasure_chance=chance)
    assert set(roles[1:9]) == {expected}


def test_treasure_rate_is_close_to_chance() -> None:
    roles = classify_rooms(5000, 4999, get_rng(2024))
    treasure = Counter(roles)[RoomRole.TREASURE]
    assert 0.17 < treasure / 4998 < 0.23


def test_only_rolled_rooms_draw_randomness() -> None:
    rng = get_rng(8)
    classify_rooms(5, 4, rng)
    reference = get_rng(8)
    for _ in range(3):
        reference.random()
    assert rng.random() == reference.random()
