#!/usr/bin/env python3
"""
IFO Factory - scenario runner

Builds a fresh chain and factory from config, then replays a YAML scenario
of invocations and queries against it, printing each result as JSON.

Usage:
    python run.py scenarios/example.yaml
    python run.py scenarios/example.yaml --config config/config.yaml
    python run.py scenarios/example.yaml --owner alice --quiet
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, TypedDict

import yaml
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from src.config import get_validated_config, load_config, set_config_value
from src.ifo.builder import build_interface
from src.ifo.interface import INVOKE_SCHEMA, FactoryInterface

# Scenario placeholder for the factory's own address
FACTORY_HOLDER = "factory"


class StepResult(TypedDict):
    """One replayed scenario step."""

    step: int
    kind: str
    result: dict[str, Any]


def _resolve(value: Any, now: int) -> Any:
    """Expand "now", "now+N" and "now-N" into chain timestamps."""
    if isinstance(value, str) and value.startswith("now"):
        rest = value[3:].strip()
        if not rest:
            return now
        return now + int(rest.replace(" ", ""))
    return value


def _holder(interface: FactoryInterface, holder: str) -> str:
    return interface.factory.address if holder == FACTORY_HOLDER else holder


def setup_chain(interface: FactoryInterface, scenario: dict[str, Any]) -> None:
    """Register assets and mint starting balances."""
    chain = interface.factory.chain
    for asset in scenario.get("assets", []):
        chain.create_asset(asset["id"], asset.get("symbol", ""))
    for mint in scenario.get("balances", []):
        chain.mint(mint["asset"], _holder(interface, mint["holder"]), int(mint["amount"]))


def run_step(interface: FactoryInterface, step: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Execute one scenario step and return (kind, result)."""
    chain = interface.factory.chain
    now = chain.timestamp

    if "advance" in step:
        return "advance", {"success": True, "timestamp": chain.advance_time(int(step["advance"]))}

    if "send" in step:
        send = step["send"]
        sender = _holder(interface, send["from"])
        recipient = _holder(interface, send["to"])
        ok = chain.transfer(send["asset"], sender, recipient, int(send["amount"]))
        return "send", {"success": ok}

    if "invoke" in step:
        method = step["invoke"]
        raw_args = step.get("args", [])
        if isinstance(raw_args, dict):
            raw_args = [raw_args.get(name) for name in INVOKE_SCHEMA.get(method, [])]
        args = [_resolve(a, now) for a in raw_args]
        return "invoke", interface.invoke(method, args, step.get("caller", ""))

    if "query" in step:
        params = {k: _resolve(v, now) for k, v in (step.get("params") or {}).items()}
        return "query", interface.query(step["query"], params)

    raise ValueError(f"Unrecognized scenario step: {sorted(step)}")


def run_scenario(
    scenario_path: str,
    verbose: bool = True,
) -> list[StepResult]:
    """Replay a scenario file against a freshly built factory."""
    with open(scenario_path) as f:
        scenario: dict[str, Any] = yaml.safe_load(f) or {}

    config = get_validated_config()
    interface = build_interface(config)
    setup_chain(interface, scenario)

    results: list[StepResult] = []
    for number, step in enumerate(scenario.get("steps", []), start=1):
        kind, result = run_step(interface, step)
        results.append({"step": number, "kind": kind, "result": result})
        if verbose:
            print(json.dumps(results[-1], default=str))
    return results


def main() -> None:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Replay an IFO factory scenario"
    )
    parser.add_argument("scenario", help="Path to scenario YAML file")
    parser.add_argument(
        "--config", default="config/config.yaml", help="Path to config file"
    )
    parser.add_argument("--owner", type=str, help="Override factory owner")
    parser.add_argument("--quiet", action="store_true", help="Suppress output")
    args: argparse.Namespace = parser.parse_args()

    load_config(args.config)
    if args.owner:
        set_config_value("factory.owner", args.owner)

    config = get_validated_config()
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not Path(args.scenario).exists():
        print(f"Scenario file '{args.scenario}' not found", file=sys.stderr)
        sys.exit(1)

    results = run_scenario(args.scenario, verbose=not args.quiet)
    failures = [r for r in results if not r["result"].get("success", False)]
    if not args.quiet:
        print(f"{len(results)} steps, {len(failures)} failed")
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
