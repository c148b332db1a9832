#!/usr/bin/env python3
"""Replay match scenarios through the mode controller and report timelines.

Usage:
    .venv/bin/python3 run_scenarios.py [scenario.json ...]

If no files are given, replays every scenario under ``scenarios/``.
Exits non-zero when any tick lands in an unexpected mode.
"""

import argparse
import json
import sys
from pathlib import Path

# Ensure src/ is on path when run from a checkout
sys.path.insert(0, str(Path(__file__).parent / "src"))

from loguru import logger

from app.config import settings
from arena.ai.scenario import load_match_scenario, replay


def run_one(path: Path, verbose: bool = False) -> dict:
    """Replay one scenario file, print its timeline, return a summary."""
    scenario = load_match_scenario(path)
    print(f"\n{'='*60}")
    print(f"  SCENARIO: {scenario.name} ({scenario.scenario_id})")
    print(f"{'='*60}")
    if scenario.description:
        print(f"  {scenario.description}")
    print(f"  Ticks: {len(scenario.ticks)}, towers: {len(scenario.towers)}, "
          f"start mode: {scenario.initial.mode}")
    if scenario.tags:
        print(f"  Tags: {', '.join(scenario.tags)}")
    print()

    result = replay(
        scenario,
        config=settings.controller_config(),
        threat_table=settings.threat_table(),
    )

    for t in result.ticks:
        mark = "ok" if t.ok else "FAIL"
        expect = f" expect={t.expect}" if t.expect is not None else ""
        if verbose or not t.ok or t.expect is not None:
            top = f" top={t.top_unit_type}" if t.top_unit_type else ""
            print(f"  [{t.time:6.2f}s] {str(t.mode):>8s}  threat={t.threat:4g}{top}  "
                  f"invest={t.elixir_investment:g}{expect}  {mark}")

    status = "pass" if result.passed else "fail"
    print(f"\n  Status: {status} ({len(result.failures)} failing ticks)")
    return {
        "scenario": scenario.scenario_id,
        "status": status,
        "tags": list(scenario.tags),
        "ticks": len(result.ticks),
        "failures": len(result.failures),
        "final_mode": str(result.modes[-1]) if result.modes else None,
    }


def discover(directory: Path) -> list[Path]:
    return sorted(directory.glob("*.json"))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("files", nargs="*", type=Path, help="scenario JSON files")
    parser.add_argument("-v", "--verbose", action="store_true", help="print every tick")
    parser.add_argument("--json", action="store_true", help="print the summary as JSON")
    args = parser.parse_args(argv)

    paths = args.files or discover(Path(settings.scenarios_dir))
    if not paths:
        print(f"No scenarios found in {settings.scenarios_dir}")
        return 1

    results = []
    for path in paths:
        try:
            results.append(run_one(path, verbose=args.verbose))
        except (OSError, json.JSONDecodeError, KeyError, ValueError) as e:
            logger.warning(f"Scenario {path} failed to load: {e}")
            results.append({"scenario": str(path), "status": "error", "error": str(e)})

    print(f"\n\n{'='*60}")
    print("  SUMMARY")
    print(f"{'='*60}")
    for r in results:
        print(f"  {r['scenario']:30s}  status={r['status']}  "
              f"failures={r.get('failures', '-')}  final={r.get('final_mode', '-')}")
    if args.json:
        print(json.dumps(results, indent=2))

    return 0 if all(r["status"] == "pass" for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
