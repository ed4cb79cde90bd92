from __future__ import annotations

import pytest

from config.config_loader import DEFAULT_CONFIG_FILE, ConfigLoader
from modules.dungeon.gen.params import DungeonGenParams, RandomWalkParams
from modules.loot.params import LootParams
from modules.loot.rarity import DEFAULT_RARITY_TABLE, Rarity


def test_shipped_settings_match_defaults() -> None:
    loader = ConfigLoader(DEFAULT_CONFIG_FILE)
    assert DungeonGenParams.from_config(loader) == DungeonGenParams()
    loot = LootParams.from_config(loader)
    assert loot == LootParams()
    assert [entry.base_weight for entry in loot.rarity_table] == [100, 40, 15, 5, 1]


def test_missing_file_gives_empty_configuration(tmp_path) -> None:
    loader = ConfigLoader(str(tmp_path / "absent.yaml"))
    assert loader.config == {}
    assert loader.section("dungeon") == {}
    assert DungeonGenParams.from_config(loader, seed=3) == DungeonGenParams(seed=3)


def test_yaml_file_is_read(tmp_path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(
        "dungeon:\n  width: 32\n  random_walk:\n    iterations: 3\nloot:\n  item_budget: 8\n",
        encoding="utf-8",
    )
    loader = ConfigLoader(str(path))
    params = DungeonGenParams.from_config(loader)
    assert params.width == 32 and params.height == 20
    assert params.random_walk == RandomWalkParams(iterations=3)
    assert LootParams.from_config(loader).item_budget == 8


def test_get_walks_nested_keys() -> None:
    loader = ConfigLoader.from_mapping({"loot": {"noise_scale": 0.2}})
    assert loader.get("loot", "noise_scale") == 0.2
    assert loader.get("loot", "missing", default=None) is None
    with pytest.raises(KeyError):
        loader.get("loot", "missing")


def test_non_mapping_section_raises() -> None:
    with pytest.raises(TypeError):
        ConfigLoader.from_mapping({"dungeon": [1, 2]}).section("dungeon")


def test_explicit_overrides_win_and_none_is_ignored() -> None:
    loader = ConfigLoader.from_mapping({"dungeon": {"width": 30}, "loot": {"difficulty": 1.5}})
    params = DungeonGenParams.from_config(loader, width=None, height=12, seed=9)
    assert (params.width, params.height, params.seed) == (30, 12, 9)
    loot = LootParams.from_config(loader, difficulty=None, item_budget=5)
    assert (loot.difficulty, loot.item_budget) == (1.5, 5)


def test_rarity_table_from_configuration() -> None:
    loader = ConfigLoader.from_mapping(
        {"loot": {"rarity_table": [{"rarity": "Legendary", "base_weight": 2}, {"rarity": "Normal", "base_weight": 50}]}}
    )
    table = LootParams.from_config(loader).rarity_table
    assert [entry.rarity for entry in table] == [Rarity.NORMAL, Rarity.LEGENDARY]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0},
        {"min_room_height": -1},
        {"treasure_chance": 1.5},
        {"offset": -1},
    ],
)
def test_invalid_dungeon_params_raise(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        DungeonGenParams(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"item_budget": -1},
        {"noise_scale": 0.0},
        {"noise_threshold": 1.2},
        {"difficulty": 0.4},
        {"penalty_scale": 3.5},
        {"trade_off_chance": 101.0},
        {"rarity_table": ()},
    ],
)
def test_invalid_loot_params_raise(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        LootParams(**kwargs)


def test_loot_params_derive_noise_from_seed() -> None:
    noise = LootParams(noise_scale=0.3, noise_threshold=0.6).noise_params(20001)
    assert (noise.scale, noise.threshold) == (0.3, 0.6)
    assert noise.offset_x == pytest.approx(0.01)
    assert noise.offset_y == pytest.approx(0.02)
    assert LootParams().rarity_table == DEFAULT_RARITY_TABLE


def test_random_walk_params_validate() -> None:
    with pytest.raises(ValueError):
        RandomWalkParams(iterations=0)
