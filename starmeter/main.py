"""Command line entry point: difficulty and performance of JSON beatmaps and scores."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from starmeter.beatmap.models import parse_mods
from starmeter.difficulty.engine import DifficultyCalculator
from starmeter.difficulty.performance import PerformanceCalculator
from starmeter.schemas import (
    BeatmapInput,
    DifficultyAttributesResponse,
    PerformanceAttributesResponse,
    PerformanceReport,
    ScoreInput,
)

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> dict:
    with open(path) as f:
        return json.load(f)


def cmd_difficulty(args) -> str:
    beatmap = BeatmapInput.model_validate(_read_json(args.beatmap)).to_model()
    attributes = DifficultyCalculator().calculate(beatmap, parse_mods(args.mods))
    return DifficultyAttributesResponse.from_attributes(attributes).model_dump_json(indent=2)


def cmd_performance(args) -> str:
    beatmap = BeatmapInput.model_validate(_read_json(args.beatmap)).to_model()
    score = ScoreInput.model_validate(_read_json(args.score)).to_model()

    difficulty = DifficultyCalculator().calculate(beatmap, score.mods)
    performance = PerformanceCalculator().calculate(difficulty, score)

    report = PerformanceReport(
        difficulty=DifficultyAttributesResponse.from_attributes(difficulty),
        performance=PerformanceAttributesResponse.from_attributes(performance),
    )
    return report.model_dump_json(indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="starmeter",
        description="Difficulty and performance rating of osu! beatmaps",
    )
    parser.add_argument("--verbose", action="store_true",
                        help="Log pipeline progress to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    difficulty = subparsers.add_parser("difficulty", help="Difficulty attributes of a beatmap")
    difficulty.add_argument("beatmap", type=Path, help="Beatmap JSON file")
    difficulty.add_argument("--mods", default="",
                            help="Mod acronyms, e.g. HDDT (default: none)")
    difficulty.set_defaults(func=cmd_difficulty)

    performance = subparsers.add_parser("performance", help="Performance points of a score")
    performance.add_argument("beatmap", type=Path, help="Beatmap JSON file")
    performance.add_argument("score", type=Path, help="Score JSON file (mods included)")
    performance.set_defaults(func=cmd_performance)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        output = args.func(args)
    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e.filename}", file=sys.stderr)
        return 1
    except (ValidationError, ValueError, json.JSONDecodeError) as e:
        print(f"ERROR: Invalid input: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
