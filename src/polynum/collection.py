"""Shape-preserving element-wise mapping over nested collections."""

from __future__ import annotations

import numbers
from decimal import Decimal
from fractions import Fraction
from typing import Callable

import jax
import jax.numpy as jnp

from .config import get_config
from .errors import SkipZerosViolation
from .values import is_matrix_like, is_zero, scalar_dtype, size_of


def is_collection(value: object) -> bool:
    return is_matrix_like(value)


def deep_map(collection, fn: Callable[[object], object], skip_zeros: bool = False):
    """Apply `fn` to every scalar of `collection`, returning a new collection.

    Lists and tuples are rebuilt level by level; JAX arrays are walked in
    row-major order and re-packed to the same shape. A scalar argument is
    mapped directly.

    With `skip_zeros` the caller asserts that ``fn(zero) == zero`` for every
    numeric representation in the collection; such zeros are copied without
    calling `fn`. Booleans, strings and units are never skipped. When
    `validate_skip_zeros` is configured the assertion is checked instead of
    trusted.

    Errors raised by `fn` propagate unchanged and stop the traversal.
    """
    validate = skip_zeros and get_config().validate_skip_zeros
    return _map_value(collection, fn, skip_zeros, validate)


def _map_value(value, fn, skip_zeros: bool, validate: bool):
    if isinstance(value, jax.Array) and value.ndim >= 1:
        return _map_matrix(value, fn, skip_zeros, validate)
    if isinstance(value, list):
        return [_map_value(item, fn, skip_zeros, validate) for item in value]
    if isinstance(value, tuple):
        return tuple(_map_value(item, fn, skip_zeros, validate) for item in value)
    if skip_zeros and is_zero(value):
        if validate:
            _check_fixed_point(fn, value)
        return value
    return fn(value)


def _check_fixed_point(fn, zero) -> None:
    mapped = fn(zero)
    if not bool(mapped == zero):
        name = getattr(fn, "__name__", repr(fn))
        raise SkipZerosViolation(f"{name} maps zero {zero!r} to {mapped!r}; skip_zeros must not be used with it")


def _map_matrix(matrix: jax.Array, fn, skip_zeros: bool, validate: bool):
    shape = tuple(int(d) for d in matrix.shape)
    if matrix.size == 0:
        return jnp.zeros(shape, dtype=matrix.dtype)

    flat = jax.device_get(matrix).reshape(-1)
    zero_mask = None
    if skip_zeros and matrix.dtype != bool:
        zero_mask = (flat == 0).tolist()

    results = []
    for idx, element in enumerate(flat):
        if zero_mask is not None and zero_mask[idx]:
            if validate:
                _check_fixed_point(fn, element)
            results.append(element)
            continue
        results.append(fn(element))

    if all(_is_packable(item) for item in results):
        kept = all(_has_dtype(item, matrix.dtype) for item in results)
        return jnp.asarray(results, dtype=matrix.dtype if kept else None).reshape(shape)
    return _unflatten(results, shape)


def _is_packable(value: object) -> bool:
    if isinstance(value, jax.Array):
        return value.ndim == 0
    if isinstance(value, (Decimal, Fraction)):
        return False
    if scalar_dtype(value) is not None:
        return True
    return isinstance(value, numbers.Number)


def _has_dtype(value: object, dtype) -> bool:
    own = scalar_dtype(value)
    return own is not None and own == dtype


def _unflatten(items: list, shape: tuple[int, ...]):
    if len(shape) == 1:
        return list(items)
    step = len(items) // shape[0]
    return [_unflatten(items[i * step : (i + 1) * step], shape[1:]) for i in range(shape[0])]


__all__ = ["deep_map", "is_collection", "size_of"]
