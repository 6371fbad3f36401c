"""CLI runner: configure a flow-analysis job from the environment and record it."""

from __future__ import annotations

import argparse
import logging
import sys

from flowjob.adapters.manifest import ManifestAnalysisManager
from flowjob.config import ConfigurationError, Settings, load_settings
from flowjob.core.pipeline import (
    DEFAULT_RUN_NUMBER,
    AnalysisStartError,
    parse_centrality_edges,
    run_analysis,
)
from flowjob.core.task_family import FAMILY_ORDER, ManagerSetupError, task_name

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flowjob",
        description="flowjob CLI — configure flow-analysis jobs per centrality bin",
    )
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Override FLOWJOB_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("plan", help="Print centrality wagons and task names")

    run = sub.add_parser("run", help="Configure the job and write its manifest")
    run.add_argument("run_number", nargs="?", type=int, default=DEFAULT_RUN_NUMBER,
                     help=f"Run number (default: {DEFAULT_RUN_NUMBER})")
    run.add_argument("--events", type=int, default=100,
                     help="Local mode: number of input files to chain")
    run.add_argument("--offset", type=int, default=0,
                     help="Local mode: input files to skip")
    run.add_argument("--manifest-dir", default="flowjob-manifest",
                     help="Directory receiving manifest.json and weights.root")

    return parser


def _setup_logging(settings: Settings, override: str | None) -> None:
    level = (override or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    )


def cmd_plan(settings: Settings) -> None:
    bins = parse_centrality_edges(settings.centrality_bin_edges_raw)
    print(f"=== flowjob plan: {len(bins)} centrality bins, {4 * len(bins)} tasks ===")
    print(f"  mode:         {settings.analysis_mode.value}")
    print(f"  output file:  {settings.output_file}")
    for index, (low, high) in enumerate(bins):
        print(f"  wagon {index}: {low:.1f}-{high:.1f}")
        for kind in FAMILY_ORDER:
            print(f"    {task_name(settings.task_basename, kind, low, high)}")


def cmd_run(settings: Settings, args: argparse.Namespace) -> None:
    manager = ManifestAnalysisManager(args.manifest_dir)
    plan = run_analysis(settings, manager, args.run_number, args.events, args.offset)
    print(f"=== flowjob run {plan.run_number}: {len(plan.tasks)} tasks configured ===")
    for binding in plan.bindings:
        print(f"  {binding.task_name}  ->  {binding.output_file}")
    print(f"  manifest:  {args.manifest_dir}")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc
    _setup_logging(settings, args.log_level)

    try:
        if args.command == "plan":
            cmd_plan(settings)
        elif args.command == "run":
            cmd_run(settings, args)
    except (ConfigurationError, ManagerSetupError, AnalysisStartError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        raise SystemExit(f"flowjob {args.command} failed: {exc}") from exc


if __name__ == "__main__":
    main()
