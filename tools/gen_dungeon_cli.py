"""Command line interface to generate dungeons and their loot for development."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from config.config_loader import DEFAULT_CONFIG_FILE, ConfigLoader
from modules.dungeon.errors import DungeonError
from modules.dungeon.gen.layout import generate_dungeon
from modules.dungeon.gen.params import DungeonGenParams
from modules.dungeon.overrides import load_overrides_json
from modules.dungeon.spec import save_json
from modules.loot.params import LootParams
from modules.loot.report import save_report
from modules.loot.spawner import generate_and_spawn
from utils.logger import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a procedural dungeon and optionally its loot.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="YAML settings file.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--min-room-width", type=int, default=None)
    parser.add_argument("--min-room-height", type=int, default=None)
    parser.add_argument(
        "--random-walk-rooms",
        action="store_true",
        default=None,
        help="Shape room floors with random walks instead of filled rectangles.",
    )
    parser.add_argument("--out", required=True, help="Path to the dungeon JSON output.")

    loot = parser.add_argument_group("loot")
    loot.add_argument("--spawn", action="store_true", help="Also place loot in the dungeon.")
    loot.add_argument("--budget", type=int, default=None)
    loot.add_argument("--noise-scale", type=float, default=None)
    loot.add_argument("--noise-threshold", type=float, default=None)
    loot.add_argument("--difficulty", type=float, default=None)
    loot.add_argument("--penalty-scale", type=float, default=None)
    loot.add_argument("--trade-off-chance", type=float, default=None, help="Percent, 0-100.")
    loot.add_argument("--overrides", help="JSON list of room type overrides.")
    loot.add_argument(
        "--report-dir",
        help="Directory receiving the item report. When omitted no report is written.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    loader = ConfigLoader(args.config)
    try:
        dungeon_params = DungeonGenParams.from_config(
            loader,
            seed=args.seed,
            width=args.width,
            height=args.height,
            min_room_width=args.min_room_width,
            min_room_height=args.min_room_height,
            random_walk_rooms=args.random_walk_rooms,
        )
        loot_params = LootParams.from_config(
            loader,
            item_budget=args.budget,
            noise_scale=args.noise_scale,
            noise_threshold=args.noise_threshold,
            difficulty=args.difficulty,
            penalty_scale=args.penalty_scale,
            trade_off_chance=args.trade_off_chance,
        )
    except (TypeError, ValueError) as exc:
        parser.error(str(exc))

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if not args.spawn:
        save_json(generate_dungeon(dungeon_params), out_path)
        return

    overrides = load_overrides_json(args.overrides) if args.overrides else None
    try:
        layout, result = generate_and_spawn(dungeon_params, loot_params, overrides=overrides)
    except DungeonError as exc:
        parser.error(str(exc))
    save_json(layout, out_path)

    if args.report_dir:
        save_report(result.report, args.report_dir)


if __name__ == "__main__":
    main()
