from __future__ import annotations

import argparse
import asyncio
import csv
import random
import sys
from collections import Counter
from pathlib import Path

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.economy.spin.errors import SpinError
from app.economy.spin.outcomes import DEFAULT_PRIZE_TIERS, OutcomeSelector
from app.economy.spin.service import SpinLedger
from app.economy.spin.transactions import run_spin_transaction
from app.economy.spin.types import IssuedSpinCode


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spin code issuance and prize table tool")
    subparsers = parser.add_subparsers(dest="command", required=True)

    issue_parser = subparsers.add_parser("issue", help="issue new single-use spin codes")
    issue_parser.add_argument("--count", type=int, required=True)
    issue_parser.add_argument("--output-csv", type=Path)

    odds_parser = subparsers.add_parser("odds", help="compare empirical draws with configured odds")
    odds_parser.add_argument("--draws", type=int, default=100_000)
    odds_parser.add_argument("--seed", type=int)
    return parser.parse_args(argv)


def _write_csv(path: Path, issued: list[IssuedSpinCode]) -> None:
    with path.open("w", encoding="utf-8", newline="") as file:
        writer = csv.writer(file)
        writer.writerow(["id", "code", "status", "created_at"])
        for item in issued:
            writer.writerow([item.id, item.code, item.status, item.created_at.isoformat()])


async def _issue(args: argparse.Namespace) -> int:
    if args.count <= 0:
        raise ValueError("--count must be positive")

    issued = await run_spin_transaction(
        lambda session: SpinLedger.issue(session, count=args.count),
        op_name="issue",
    )
    if args.output_csv:
        _write_csv(args.output_csv, issued)
    for item in issued:
        print(item.code)
    print(f"generated={len(issued)} requested={args.count}", file=sys.stderr)
    return 0


def _odds(args: argparse.Namespace) -> int:
    if args.draws <= 0:
        raise ValueError("--draws must be positive")

    rng = random.Random(args.seed)
    selector = OutcomeSelector(DEFAULT_PRIZE_TIERS, random_source=rng.random)
    counts = Counter(selector.draw().label for _ in range(args.draws))

    print(f"{'label':<12}{'weight':>10}{'observed':>12}{'delta':>10}")
    for tier in selector.tiers:
        observed = counts[tier.label] / args.draws
        print(f"{tier.label:<12}{tier.weight:>10.4f}{observed:>12.4f}{observed - tier.weight:>+10.4f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(get_settings().log_level)
    try:
        if args.command == "issue":
            return asyncio.run(_issue(args))
        return _odds(args)
    except (SpinError, ValueError) as exc:
        print(f"error: {str(exc) or type(exc).__name__}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
