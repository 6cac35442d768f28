"""Runtime value model: type tags and the tag resolver."""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Callable, Final

import jax
import jax.numpy as jnp

from .errors import UnsupportedTypeError
from .units import Unit


class TypeTag(str, Enum):
    NUMBER = "number"
    COMPLEX = "Complex"
    BIGNUMBER = "BigNumber"
    FRACTION = "Fraction"
    UNIT = "Unit"
    ARRAY = "Array"
    MATRIX = "Matrix"
    BOOLEAN = "boolean"
    STRING = "string"
    NULL = "null"
    FUNCTION = "function"
    OBJECT = "Object"

    def __str__(self) -> str:
        return self.value


MATRIX_LIKE: Final[frozenset[TypeTag]] = frozenset({TypeTag.ARRAY, TypeTag.MATRIX})

# Scalar tags whose zero value may be skipped by collection mapping.
ZERO_SKIPPABLE: Final[frozenset[TypeTag]] = frozenset(
    {TypeTag.NUMBER, TypeTag.COMPLEX, TypeTag.BIGNUMBER, TypeTag.FRACTION}
)


def scalar_dtype(value: object):
    """Dtype of a 0-d JAX array or NumPy-style scalar, else None."""
    if isinstance(value, jax.Array):
        return value.dtype if value.ndim == 0 else None
    dtype = getattr(value, "dtype", None)
    if dtype is not None and getattr(value, "shape", None) == ():
        return dtype
    return None


def _is_boolean(value: object) -> bool:
    if isinstance(value, bool):
        return True
    dtype = scalar_dtype(value)
    return dtype is not None and dtype == bool


def _is_number(value: object) -> bool:
    dtype = scalar_dtype(value)
    if dtype is not None:
        # Extended float types such as bfloat16 are not registered with ``numbers``.
        return bool(jnp.issubdtype(dtype, jnp.integer) or jnp.issubdtype(dtype, jnp.floating))
    if isinstance(value, (bool, Decimal, Fraction)):
        return False
    return isinstance(value, numbers.Real)


def _is_complex(value: object) -> bool:
    dtype = scalar_dtype(value)
    if dtype is not None:
        return bool(jnp.issubdtype(dtype, jnp.complexfloating))
    return isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real)


def _is_array(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _is_matrix(value: object) -> bool:
    return isinstance(value, jax.Array) and value.ndim >= 1


def _is_object(value: object) -> bool:
    return isinstance(value, Mapping) or hasattr(value, "__dict__")


# Ordered: the first matching test wins. Booleans precede numbers because
# ``bool`` is an ``int`` subclass; functions precede objects because most
# callables carry a ``__dict__``.
TYPE_TESTS: Final[tuple[tuple[TypeTag, Callable[[object], bool]], ...]] = (
    (TypeTag.BOOLEAN, _is_boolean),
    (TypeTag.NUMBER, _is_number),
    (TypeTag.COMPLEX, _is_complex),
    (TypeTag.BIGNUMBER, lambda value: isinstance(value, Decimal)),
    (TypeTag.FRACTION, lambda value: isinstance(value, Fraction)),
    (TypeTag.UNIT, lambda value: isinstance(value, Unit)),
    (TypeTag.STRING, lambda value: isinstance(value, str)),
    (TypeTag.ARRAY, _is_array),
    (TypeTag.MATRIX, _is_matrix),
    (TypeTag.NULL, lambda value: value is None),
    (TypeTag.FUNCTION, callable),
    (TypeTag.OBJECT, _is_object),
)


def resolve_tag(value: object) -> TypeTag:
    for tag, test in TYPE_TESTS:
        if test(value):
            return tag
    raise UnsupportedTypeError(value)


def parse_tag(name: str) -> TypeTag:
    """Look up a tag by its signature spelling (e.g. ``"BigNumber"``)."""
    try:
        return TypeTag(name.strip())
    except ValueError:
        known = ", ".join(tag.value for tag in TypeTag)
        raise ValueError(f"Unknown type {name.strip()!r}; known types: {known}") from None


def is_matrix_like(value: object) -> bool:
    return _is_array(value) or _is_matrix(value)


def is_zero(value: object) -> bool:
    """True for the zero of a skippable scalar representation."""
    for tag, test in TYPE_TESTS:
        if test(value):
            if tag is TypeTag.BIGNUMBER:
                # Comparing a signaling NaN raises; is_zero() never signals.
                return value.is_zero()  # type: ignore[union-attr]
            return tag in ZERO_SKIPPABLE and bool(value == 0)
    return False


@dataclass(frozen=True)
class ValueInfo:
    tag: TypeTag
    shape: tuple[int, ...]
    size: int
    depth: int


def shape_of(value: object) -> tuple[int, ...]:
    if _is_matrix(value):
        return tuple(int(d) for d in value.shape)
    if _is_array(value):
        if not value:
            return (0,)
        inner = [shape_of(item) if is_matrix_like(item) else () for item in value]
        first = inner[0]
        if all(shape == first for shape in inner):
            return (len(value),) + first
        return (len(value),)
    return ()


def size_of(value: object) -> int:
    """Number of scalar leaves in a (possibly nested) collection."""
    if _is_matrix(value):
        return int(value.size)
    if _is_array(value):
        return sum(size_of(item) for item in value)
    return 1


def depth_of(value: object) -> int:
    if _is_matrix(value):
        return int(value.ndim)
    if _is_array(value):
        if not value:
            return 1
        return 1 + max(depth_of(item) for item in value)
    return 0


def value_info(value: object) -> ValueInfo:
    tag = resolve_tag(value)
    return ValueInfo(tag=tag, shape=shape_of(value), size=size_of(value), depth=depth_of(value))
