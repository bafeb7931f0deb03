"""Command-line entry point: generate one battle map and print a summary.

Usage:
    python -m tacmap --seed NEXUS_ALPHA --size tactical
    python -m tacmap --new-seed --river 0 --profile
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from collections import Counter

from tacmap import config
from tacmap.environment.generators import GeneratedMap, generate_map
from tacmap.environment.map import MapConfig, new_seed
from tacmap.types import BiomeType
from tacmap.util.performance import enable_performance_tracking, get_performance_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tacmap", description="Generate a tactical battle map."
    )
    parser.add_argument("--seed", default=config.DEFAULT_SEED, help="Seed string.")
    parser.add_argument(
        "--new-seed", action="store_true", help="Ignore --seed and roll a fresh one."
    )
    parser.add_argument(
        "--size",
        choices=sorted(config.MAP_SIZE_PRESETS),
        help="Square map size preset.",
    )
    parser.add_argument("--width", type=float, help="Map width in world units.")
    parser.add_argument("--height", type=float, help="Map height in world units.")
    parser.add_argument("--density", type=float, help="Obstacle density.")
    parser.add_argument("--pois", type=int, help="Number of points of interest.")
    for biome in BiomeType:
        parser.add_argument(
            f"--{biome.value.lower()}",
            type=int,
            metavar="WEIGHT",
            help=f"{biome.value} weight (0-10).",
        )
    parser.add_argument(
        "--tributaries", type=int, help="Number of river tributaries."
    )
    parser.add_argument(
        "--profile", action="store_true", help="Print per-layer timings."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    return parser


def config_from_args(args: argparse.Namespace) -> MapConfig:
    """Build a clamped MapConfig from parsed arguments."""
    map_config = MapConfig(seed=new_seed() if args.new_seed else args.seed)
    if args.size:
        map_config = map_config.with_size(args.size)

    overrides = {
        "width": args.width,
        "height": args.height,
        "obstacle_density": args.density,
        "poi_count": args.pois,
        "river_tributaries": args.tributaries,
    }
    map_config = dataclasses.replace(
        map_config, **{k: v for k, v in overrides.items() if v is not None}
    )
    if map_config.width <= 0 or map_config.height <= 0:
        raise ValueError("Map width and height must be positive")

    for biome in BiomeType:
        weight = getattr(args, biome.value.lower())
        if weight is not None:
            map_config = map_config.with_weight(biome, weight)

    return map_config.clamped()


def format_summary(battle_map: GeneratedMap) -> str:
    cfg = battle_map.config
    river_weight = cfg.weight(BiomeType.RIVER)
    obstacle_counts = Counter(o.biome.value for o in battle_map.obstacles)
    zone_counts = Counter(z.biome.value for z in battle_map.zones)

    lines = [
        f"Seed:        {cfg.seed}",
        f"Dimensions:  {cfg.width:g} x {cfg.height:g}",
        f"River:       {config.RIVER_SCALE_LABELS[river_weight]}"
        f" ({'present' if battle_map.river else 'absent'})",
        f"Clusters:    {len(battle_map.clusters)}",
        f"Obstacles:   {len(battle_map.obstacles)} "
        f"{dict(sorted(obstacle_counts.items()))}",
        f"Zones:       {len(battle_map.zones)} {dict(sorted(zone_counts.items()))}",
        f"POIs:        {len(battle_map.pois)}",
        f"Nav graph:   {len(battle_map.nav_graph.nodes)} nodes, "
        f"{len(battle_map.nav_graph.edges)} edges",
        f"Respawn:     ({battle_map.respawn.x:g}, {battle_map.respawn.y:g})",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.profile:
        enable_performance_tracking()

    try:
        map_config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    battle_map = generate_map(map_config)
    print(format_summary(battle_map))
    if args.profile:
        print()
        print(get_performance_report(filter_prefix="mapgen."))


if __name__ == "__main__":
    main()
