#!/usr/bin/env python3
"""
Run the execute-once operation against a work item stored as JSON.

Usage:
    python -m mediaflow.tools.run_step --work-item wi.json --config step.yaml
    python -m mediaflow.tools.run_step --work-item wi.json --config step.yaml \\
        --mode local --workspace /tmp/ws --output wi.out.json

The step configuration file is a YAML mapping of option keys
(exec, params, output-filename, expected-type, target-flavor, target-tags, ...).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from mediaflow.config.runtime_config import VALID_ENGINE_MODES, get_job_workers
from mediaflow.runtime.errors import StepOperationError
from mediaflow.runtime.execute_once import build_execute_once_operation
from mediaflow.runtime.jobs import JobQueue
from mediaflow.runtime.types import work_item_from_dict, work_item_to_dict

logger = logging.getLogger(__name__)


def load_step_options(path: Path) -> Dict[str, Any]:
    """Load step options from a YAML mapping (empty file means no options)."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of step options")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the execute-once operation on a work item",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--work-item", "-w",
        type=Path,
        required=True,
        help="JSON file holding the work item",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="YAML file holding the step options",
    )
    parser.add_argument(
        "--mode",
        choices=VALID_ENGINE_MODES,
        help="Execution engine mode (default: from runtime configuration)",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Workspace root (default: from runtime configuration)",
    )
    parser.add_argument(
        "--skip",
        action="store_true",
        help="Skip the step instead of running it",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write the updated work item to this file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    work_item = work_item_from_dict(json.loads(args.work_item.read_text(encoding="utf-8")))
    options = load_step_options(args.config) if args.config else {}

    with JobQueue(max_workers=get_job_workers()) as queue:
        operation = build_execute_once_operation(
            queue, mode=args.mode, workspace_root=args.workspace
        )
        try:
            if args.skip:
                outcome = operation.skip(work_item, options)
            else:
                outcome = operation.execute(work_item, options)
        except StepOperationError as e:
            logger.error("Step failed: %s", e)
            print(json.dumps({"status": "failed", "error": e.to_dict()}, indent=2))
            return 1

    print(json.dumps({"status": "ok", "outcome": outcome.to_dict()}, indent=2))

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(
            json.dumps(work_item_to_dict(outcome.work_item), indent=2), encoding="utf-8"
        )
        logger.info("Work item written to %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
