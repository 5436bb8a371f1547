"""
Command-line entry point: ``python -m runtime.cli`` or ``tank-tactics``.

Runs the built-in skirmish or a scenario file to the end and logs the result.
"""

import argparse
import json
from typing import List, Optional

from infra.logger import DEFAULT_LOGFILE, configure_logging, get_logger
from .runner import BattleRunner
from .scenario import Scenario, default_skirmish

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a headless tank battle")
    parser.add_argument("--scenario", help="Scenario JSON file (default: built-in skirmish)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for attack rolls")
    parser.add_argument("--rounds", type=int, default=100, help="Round limit before a draw")
    parser.add_argument(
        "--policy",
        choices=("hp", "scored"),
        default=None,
        help="Phase selection for rule-based controllers that do not set one (default: hp)",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, ... (default: $TANK_TACTICS_LOG_LEVEL or INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit log records as JSON lines")
    parser.add_argument(
        "--log-file",
        nargs="?",
        const=str(DEFAULT_LOGFILE),
        default=None,
        help=f"Also append logs to a file (default when given without a path: {DEFAULT_LOGFILE})",
    )
    parser.add_argument("--report", help="Write the battle report to this JSON file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, json=args.json_logs, logfile=args.log_file)

    if args.scenario:
        scenario = Scenario.load_json(args.scenario)
        if args.seed is not None:
            scenario.seed = args.seed
        scenario.max_rounds = args.rounds
        if args.policy is not None:
            scenario.apply_phase_policy(args.policy)
    else:
        scenario = default_skirmish(seed=args.seed, max_rounds=args.rounds, phase_policy=args.policy or "hp")

    report = BattleRunner(scenario).run()
    log.info("Result: %s after %d rounds", report.result, report.rounds)
    for unit in report.units:
        log.info("  %s [%s] hp %d/%d alive=%s", unit["name"], unit["faction"], unit["hp"], unit["max_hp"], unit["alive"])

    if args.report:
        with open(args.report, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2)
        log.info("Report written to %s", args.report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
