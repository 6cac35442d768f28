"""Benchmark unary plus over nested lists and matrices, with and without zero skipping."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable

import jax.numpy as jnp

from polynum import deep_map, unary_plus
from _bench_utils import run_metadata, summarize_ms, time_calls


N_DEFAULT = (100, 1000, 10000)
PROFILE_CONFIG: dict[str, dict[str, int]] = {
    "quick": {"samples": 3, "warmup": 1, "repeats": 3},
    "full": {"samples": 7, "warmup": 2, "repeats": 10},
}


@dataclass(frozen=True)
class BenchCase:
    name: str
    builder: Callable[[int], object]


@dataclass(frozen=True)
class BenchRow:
    name: str
    n: int
    skip_zeros: bool
    mean_ms: float
    stdev_ms: float
    p50_ms: float
    p95_ms: float
    samples: int


def _sparse_list(n: int) -> list[object]:
    # Every other element zero so the skip path has work to avoid.
    return [[0, i, 0.0, float(i)] for i in range(max(1, n // 4))]


def _mixed_list(n: int) -> list[object]:
    return [[Decimal(i % 3), "1.5", True, i % 2] for i in range(max(1, n // 4))]


def _sparse_matrix(n: int):
    side = max(2, int(n**0.5))
    values = jnp.arange(side * side, dtype=jnp.float32).reshape(side, side)
    return jnp.where(jnp.mod(values, 2) == 0, 0.0, values)


CASES: tuple[BenchCase, ...] = (
    BenchCase("sparse_list", _sparse_list),
    BenchCase("mixed_list", _mixed_list),
    BenchCase("sparse_matrix", _sparse_matrix),
)


def _run_case(case: BenchCase, n: int, *, skip_zeros: bool, samples: int, warmup: int, repeats: int) -> BenchRow:
    value = case.builder(n)
    per_call_ms = time_calls(
        lambda v: deep_map(v, unary_plus, skip_zeros),
        value,
        repeats=repeats,
        warmup=warmup,
        samples=samples,
    )
    return BenchRow(
        name=case.name,
        n=n,
        skip_zeros=skip_zeros,
        samples=len(per_call_ms),
        **summarize_ms(per_call_ms),
    )


def _print_summary(rows: list[BenchRow]) -> None:
    print("deep_map benchmark summary")
    print("case              n       skip   mean(ms)   p95(ms)")
    print("----------------  ------  -----  ---------  --------")
    for row in rows:
        print(f"{row.name:16} {row.n:6d}  {str(row.skip_zeros):5}  {row.mean_ms:9.4f}  {row.p95_ms:8.4f}")
    print()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--profile", choices=sorted(PROFILE_CONFIG), default="quick")
    parser.add_argument("--ns", default=",".join(str(n) for n in N_DEFAULT), help="comma-separated sizes")
    parser.add_argument("--json-out", type=Path, default=None, help="write rows and host metadata as JSON")
    args = parser.parse_args()

    profile = PROFILE_CONFIG[args.profile]
    sizes = tuple(int(part) for part in args.ns.split(",") if part.strip())
    rows = [
        _run_case(case, n, skip_zeros=skip, **profile)
        for case in CASES
        for n in sizes
        for skip in (False, True)
    ]
    _print_summary(rows)

    if args.json_out is not None:
        payload = {
            "generated_at": datetime.now(UTC).isoformat(),
            "profile": args.profile,
            "run": run_metadata(),
            "rows": [asdict(row) for row in rows],
        }
        args.json_out.write_text(json.dumps(payload, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
