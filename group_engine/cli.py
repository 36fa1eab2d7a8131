"""
assign-groups — partition a JSON participant file into diverse groups.

Input: a PartitionRequest JSON document (see group_engine.requests).
Command-line flags override the document's framework / size / seed.

Exit codes: 0 success, 1 invalid input or missing cultural data,
2 too few participants.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from culture_kernel.availability import available_frameworks, validate_participants
from culture_kernel.diagnostics import compute_diagnostics
from culture_kernel.distance import CulturalDataError
from culture_kernel.domain_types import Framework
from culture_kernel.matrix import build_distance_matrix

from .engine import InsufficientParticipantsError, partition_with_report
from .requests import PartitionRequest
from .settings import load_search_config

logger = logging.getLogger("group_engine.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assign-groups",
        description="Assign participants to culturally diverse groups.",
    )
    parser.add_argument("input", type=Path, help="PartitionRequest JSON file ('-' for stdin)")
    parser.add_argument("--framework", choices=[f.value for f in Framework])
    parser.add_argument("--group-size", choices=["3", "4", "flexible"])
    parser.add_argument("--seed", help="Seed for the genetic search (omit for greedy)")
    parser.add_argument("--env-file", help="Path to a .env file with GROUPING_* settings")
    parser.add_argument("--diagnostics", action="store_true", help="Include partition diagnostics")
    parser.add_argument("--indent", type=int, default=2)
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def _read_request(path: Path) -> PartitionRequest:
    raw = sys.stdin.read() if str(path) == "-" else path.read_text(encoding="utf-8")
    return PartitionRequest.model_validate_json(raw)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        request = _read_request(args.input)
    except (OSError, ValidationError) as exc:
        logger.error("Invalid input: %s", exc)
        return 1

    framework = Framework.parse(args.framework) if args.framework else request.framework
    group_size = args.group_size or request.resolved_group_size()
    seed = args.seed if args.seed is not None else request.seed
    participants = request.to_participants()

    try:
        config = load_search_config(args.env_file)
        validate_participants(participants, framework, request.labels())
        result = partition_with_report(participants, framework, group_size, seed, config)
    except InsufficientParticipantsError as exc:
        logger.error("%s", exc)
        return 2
    except CulturalDataError as exc:
        profiles = {p.id: p.profile for p in participants}
        usable = [f.value for f in available_frameworks(profiles)]
        logger.error("%s (frameworks with complete data: %s)", exc, usable or "none")
        return 1
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    output = result.to_dict()
    if args.diagnostics:
        matrix = build_distance_matrix(participants, framework)
        output["diagnostics"] = compute_diagnostics(result.groups, matrix)

    json.dump(output, sys.stdout, indent=args.indent, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
