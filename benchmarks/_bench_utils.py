"""Timing helpers for the collection-mapping benchmarks."""

from __future__ import annotations

import platform
import statistics
import time
from typing import Any, Callable

import jax

from polynum import get_config


def run_metadata() -> dict[str, Any]:
    """Interpreter, JAX backend and numeric config the rows were measured under."""
    return {
        "python": platform.python_version(),
        "jax": jax.__version__,
        "backend": jax.default_backend(),
        "numeric_config": get_config().as_dict(),
    }


def time_calls(fn: Callable[[object], object], value: object, *, repeats: int, warmup: int, samples: int) -> list[float]:
    """Per-call wall time in milliseconds, one entry per sample of `repeats` calls."""
    for _ in range(warmup):
        jax.block_until_ready(fn(value))

    per_call_ms: list[float] = []
    for _ in range(samples):
        start_ns = time.perf_counter_ns()
        for _ in range(repeats):
            jax.block_until_ready(fn(value))
        per_call_ms.append((time.perf_counter_ns() - start_ns) / repeats / 1e6)
    return per_call_ms


def summarize_ms(per_call_ms: list[float]) -> dict[str, float]:
    if len(per_call_ms) == 1:
        only = per_call_ms[0]
        return {"mean_ms": only, "stdev_ms": 0.0, "p50_ms": only, "p95_ms": only}
    cuts = statistics.quantiles(per_call_ms, n=20, method="inclusive")
    return {
        "mean_ms": statistics.fmean(per_call_ms),
        "stdev_ms": statistics.stdev(per_call_ms),
        "p50_ms": statistics.median(per_call_ms),
        "p95_ms": cuts[18],
    }
