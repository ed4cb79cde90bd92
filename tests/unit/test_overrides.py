from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from modules.dungeon.errors import ConfigurationError
from modules.dungeon.overrides import (
    RoomRoleOverride,
    apply_overrides,
    load_overrides_json,
    load_room_assignments,
    save_overrides_json,
    select_loot_rooms,
)
from modules.dungeon.spec import DungeonLayout, RoomRole


def _overrides(*roles: RoomRole) -> list[RoomRoleOverride]:
    return [RoomRoleOverride(index, index + 1, role) for index, role in enumerate(roles)]


def test_complete_override_list_selects_treasure_and_boss(chain_layout: DungeonLayout) -> None:
    overrides = _overrides(RoomRole.START, RoomRole.COMMON, RoomRole.TREASURE, RoomRole.BOSS)
    selected = select_loot_rooms(chain_layout, overrides)
    assert selected == [(2, chain_layout.rooms[2]), (3, chain_layout.rooms[3])]


def test_repeated_override_index_selects_the_room_once(chain_layout: DungeonLayout) -> None:
    overrides = [
        RoomRoleOverride(0, 1, RoomRole.START),
        RoomRoleOverride(1, 2, RoomRole.TREASURE),
        RoomRoleOverride(1, 2, RoomRole.TREASURE),
        RoomRoleOverride(3, 4, RoomRole.COMMON),
    ]
    assert select_loot_rooms(chain_layout, overrides) == [(1, chain_layout.rooms[1])]


def test_later_override_for_an_index_wins(chain_layout: DungeonLayout) -> None:
    overrides = [
        RoomRoleOverride(0, 1, RoomRole.START),
        RoomRoleOverride(2, 3, RoomRole.BOSS),
        RoomRoleOverride(2, 3, RoomRole.COMMON),
        RoomRoleOverride(3, 4, RoomRole.TREASURE),
    ]
    assert [index for index, _ in select_loot_rooms(chain_layout, overrides)] == [3]


def test_length_mismatch_falls_back_to_every_non_start_room(chain_layout: DungeonLayout, caplog) -> None:
    overrides = _overrides(RoomRole.START, RoomRole.BOSS)
    with caplog.at_level("WARNING"):
        selected = select_loot_rooms(chain_layout, overrides)
    assert [index for index, _ in selected] == [1, 2, 3]
    assert "Ignoring 2 room overrides" in caplog.text


def test_no_overrides_uses_every_non_start_room(chain_layout: DungeonLayout) -> None:
    assert select_loot_rooms(chain_layout) == list(enumerate(chain_layout.rooms))[1:]


def test_selection_is_sorted_by_level(chain_layout: DungeonLayout) -> None:
    overrides = [
        RoomRoleOverride(3, 4, RoomRole.BOSS),
        RoomRoleOverride(0, 1, RoomRole.START),
        RoomRoleOverride(1, 2, RoomRole.TREASURE),
        RoomRoleOverride(2, 3, RoomRole.COMMON),
    ]
    selected = select_loot_rooms(chain_layout, overrides)
    assert [(index, room.level) for index, room in selected] == [(1, 2), (3, 4)]


def test_missing_layout_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        select_loot_rooms(None)


def test_no_eligible_room_is_a_configuration_error(chain_layout: DungeonLayout) -> None:
    overrides = _overrides(RoomRole.START, RoomRole.COMMON, RoomRole.COMMON, RoomRole.COMMON)
    with pytest.raises(ConfigurationError):
        select_loot_rooms(chain_layout, overrides)


def test_apply_overrides_returns_a_new_layout(chain_layout: DungeonLayout) -> None:
    updated = apply_overrides(chain_layout, [RoomRoleOverride(2, 3, RoomRole.TREASURE)])
    assert updated.rooms[2].role is RoomRole.TREASURE
    assert chain_layout.rooms[2].role is RoomRole.COMMON
    assert updated.levels == chain_layout.levels
    assert updated.floor_cells == chain_layout.floor_cells


def test_out_of_range_override_is_rejected(chain_layout: DungeonLayout) -> None:
    with pytest.raises(ConfigurationError):
        apply_overrides(chain_layout, [RoomRoleOverride(9, 1, RoomRole.BOSS)])


def test_room_assignments_carry_current_roles(chain_layout: DungeonLayout) -> None:
    assignments = load_room_assignments(chain_layout)
    assert [item.room_index for item in assignments] == [0, 1, 2, 3]
    assert [item.role for item in assignments] == [room.role for room in chain_layout.rooms]


def test_override_file_round_trip(tmp_path, chain_layout: DungeonLayout) -> None:
    path = tmp_path / "overrides.json"
    save_overrides_json(load_room_assignments(chain_layout), path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw[1] == {"roomIndex": 1, "roomLevel": 2, "type": "Treasure"}
    assert load_overrides_json(path) == load_room_assignments(chain_layout)


def test_override_file_accepts_wrapped_list(tmp_path) -> None:
    path = tmp_path / "wrapped.json"
    path.write_text(json.dumps({"rooms": [{"roomIndex": 0, "roomLevel": 1, "type": "boss"}]}), encoding="utf-8")
    assert load_overrides_json(path) == [RoomRoleOverride(0, 1, RoomRole.BOSS)]


def test_override_file_rejects_bad_entries(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"roomIndex": -1, "roomLevel": 1, "type": "Boss"}]), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_overrides_json(path)
