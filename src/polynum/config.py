"""Process-wide numeric configuration.

The active configuration is an immutable :class:`Config` snapshot. Updates
swap in a new snapshot, so readers never observe a half-applied change and
need no locking. Operations must call :func:`get_config` (or
:func:`get_preferred_representation`) at the moment they coerce a value
instead of capturing the snapshot when they are built.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Final

from .errors import ConfigError

logger = logging.getLogger(__name__)


class NumberRepresentation(str, Enum):
    NATIVE = "number"
    BIGNUMBER = "BigNumber"
    FRACTION = "Fraction"


_ENV_NUMBER: Final[str] = "POLYNUM_NUMBER"
_ENV_PRECISION: Final[str] = "POLYNUM_PRECISION"
_ENV_VALIDATE_SKIP_ZEROS: Final[str] = "POLYNUM_VALIDATE_SKIP_ZEROS"

DEFAULT_PRECISION: Final[int] = 64


def _as_representation(raw: object) -> NumberRepresentation:
    if isinstance(raw, NumberRepresentation):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        for member in NumberRepresentation:
            if lowered in (member.value.lower(), member.name.lower()):
                return member
    choices = ", ".join(repr(m.value) for m in NumberRepresentation)
    raise ConfigError(f"number must be one of {choices}, got {raw!r}")


def _as_precision(raw: object) -> int:
    if isinstance(raw, bool):
        raise ConfigError(f"precision must be a positive integer, got {raw!r}")
    try:
        precision = int(raw)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"precision must be a positive integer, got {raw!r}") from exc
    if precision < 1:
        raise ConfigError(f"precision must be a positive integer, got {raw!r}")
    return precision


@dataclass(frozen=True)
class Config:
    """Immutable configuration snapshot.

    - `number`: representation that booleans and strings coerce into.
    - `precision`: significant digits used when building BigNumbers.
    - `validate_skip_zeros`: re-check skipped zeros during collection mapping.
    """

    number: NumberRepresentation = NumberRepresentation.NATIVE
    precision: int = DEFAULT_PRECISION
    validate_skip_zeros: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "number", _as_representation(self.number))
        object.__setattr__(self, "precision", _as_precision(self.precision))
        object.__setattr__(self, "validate_skip_zeros", bool(self.validate_skip_zeros))

    def as_dict(self) -> dict[str, object]:
        return {
            "number": self.number.value,
            "precision": self.precision,
            "validate_skip_zeros": self.validate_skip_zeros,
        }


def config_from_env(environ: dict[str, str] | None = None) -> Config:
    env = os.environ if environ is None else environ
    return Config(
        number=env.get(_ENV_NUMBER, NumberRepresentation.NATIVE.value),
        precision=env.get(_ENV_PRECISION, str(DEFAULT_PRECISION)),
        validate_skip_zeros=env.get(_ENV_VALIDATE_SKIP_ZEROS, "0") == "1",
    )


_current: Config = config_from_env()

_FIELD_NAMES: Final[frozenset[str]] = frozenset(f.name for f in fields(Config))


def get_config() -> Config:
    return _current


def get_preferred_representation() -> NumberRepresentation:
    return _current.number


def configure(**changes: object) -> Config:
    """Apply `changes` on top of the current snapshot and make it current."""
    global _current
    unknown = sorted(set(changes) - _FIELD_NAMES)
    if unknown:
        raise ConfigError(f"Unknown configuration option(s): {', '.join(unknown)}")
    updated = replace(_current, **changes)
    logger.debug("numeric config changed: %s -> %s", _current.as_dict(), updated.as_dict())
    _current = updated
    return updated


def reset_config() -> Config:
    global _current
    _current = config_from_env()
    return _current


@contextmanager
def config_override(**changes: object) -> Iterator[Config]:
    global _current
    previous = _current
    try:
        yield configure(**changes)
    finally:
        _current = previous
