from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

# stdout carries the JSON plan
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from config_io import load_json_config  # noqa: E402
from config_parsing import parse_builder_config, parse_scene  # noqa: E402
from level_builder import LevelAssembler, issue_summary  # noqa: E402
from models import plan_to_dict  # noqa: E402


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Extend an authored walkway scene and print the placement plan."
    )
    p.add_argument("scene", type=str, help="Scene JSON ({\"objects\": [...]}).")
    p.add_argument(
        "--level",
        type=str,
        required=True,
        help="Level name as the host would report it (e.g. lvl3, lvl4, test).",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional builder config JSON (level map, extra tile counts).",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Entrypoint for running the builder from the command line."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    raw_cfg = load_json_config(Path(args.config)) if args.config else {}
    assembler = LevelAssembler(parse_builder_config(raw_cfg))
    scene = parse_scene(load_json_config(Path(args.scene)))

    plan = assembler.build(args.level, scene)
    if plan.issues:
        logging.getLogger(__name__).warning("recovered issues: %s", issue_summary(plan.issues))
    json.dump(plan_to_dict(plan), sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
