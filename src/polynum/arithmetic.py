"""Arithmetic operations built on typed dispatch and collection mapping."""

from __future__ import annotations

import math
import re
from decimal import Context, Decimal
from typing import Callable, Final

from .collection import deep_map
from .config import Config, NumberRepresentation, get_config
from .errors import NumericConversionError
from .typed import TypedFunction, refer_to_self, typed
from .values import TypeTag, resolve_tag

LATEX_OPERATORS: Final[dict[str, str]] = {
    "unaryPlus": "+",
}

_PREFIXED_INT = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$", re.ASCII)
_DECIMAL_INT = re.compile(r"^[+-]?\d+$", re.ASCII)
_DECIMAL_FLOAT = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)
_INFINITY = re.compile(r"^[+-]?Infinity$", re.ASCII)


def to_number(value: object) -> int | float:
    """Read a boolean or string as a native number.

    Booleans become 0 or 1. Strings are stripped; an empty string is 0,
    ``0x``/``0o``/``0b`` literals and plain integer literals become ``int``,
    decimal literals (with optional exponent) and ``Infinity`` become ``float``.
    Anything else, including digit separators and ``inf``/``nan`` spellings,
    raises :class:`NumericConversionError`.
    """
    tag = resolve_tag(value)
    if tag is TypeTag.BOOLEAN:
        return int(bool(value))
    if tag is TypeTag.NUMBER:
        return value  # type: ignore[return-value]
    if tag is not TypeTag.STRING:
        raise NumericConversionError(f"Cannot convert {tag.value} to a number")

    text = value.strip()  # type: ignore[union-attr]
    if not text:
        return 0
    if _PREFIXED_INT.match(text):
        return int(text, 0)
    if _DECIMAL_INT.match(text):
        return int(text)
    if _DECIMAL_FLOAT.match(text) or _INFINITY.match(text):
        return float(text)
    raise NumericConversionError(f"Cannot convert {value!r} to a number")


def to_bignumber(value: int | float, precision: int) -> Decimal:
    context = Context(prec=precision)
    if isinstance(value, float) and math.isfinite(value):
        # repr gives the shortest round-tripping digits (0.1, not 0.1000000000000000055...)
        return context.create_decimal(repr(value))
    return context.create_decimal(value)


def create_unary_plus(config: Callable[[], Config] = get_config) -> TypedFunction:
    """Build unary plus against the config accessor `config`.

    Numeric values are returned as is, booleans and strings are converted to
    a number (or a BigNumber when that is the configured representation), and
    collections are mapped element wise.
    """

    def _coerce(x):
        number = to_number(x)
        current = config()
        if current.number is NumberRepresentation.BIGNUMBER:
            return to_bignumber(number, current.precision)
        return number

    unary_plus = typed(
        "unaryPlus",
        {
            "number": lambda x: x,
            # complex numbers, bignumbers and fractions are immutable
            "Complex": lambda x: x,
            "BigNumber": lambda x: x,
            "Fraction": lambda x: x,
            "Unit": lambda x: x.clone(),
            # zeros can be skipped since unaryPlus(0) == 0
            "Array | Matrix": refer_to_self(lambda self: lambda x: deep_map(x, self, True)),
            "boolean | string": _coerce,
        },
    )
    unary_plus.to_tex = {1: f"{LATEX_OPERATORS['unaryPlus']}\\left(${{args[0]}}\\right)"}
    return unary_plus


unary_plus = create_unary_plus()
