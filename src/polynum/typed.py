"""Typed functions: runtime dispatch on the type tags of the arguments.

A typed function is built once from a catalog such as::

    typed("abs", {
        "number": lambda x: abs(x),
        "Array | Matrix": refer_to_self(lambda self: lambda x: deep_map(x, self)),
    })

Keys list one tag per parameter, separated by commas; ``|`` joins
alternatives for a parameter. Each alternative expands to its own exact tag
tuple, so dispatch is a single dictionary lookup on the resolved tags. There
is no implicit conversion between tags; conversions belong inside branches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import product
from types import MappingProxyType
from typing import Callable, Mapping

from .errors import NoMatchingSignatureError, SignatureError, UnsupportedTypeError
from .values import TypeTag, parse_tag, resolve_tag

logger = logging.getLogger(__name__)

Signature = tuple[TypeTag, ...]


@dataclass(frozen=True)
class SelfReference:
    """Branch placeholder resolved with the finished typed function."""

    factory: Callable[["TypedFunction"], Callable[..., object]]


def refer_to_self(factory: Callable[["TypedFunction"], Callable[..., object]]) -> SelfReference:
    """Mark a branch whose implementation needs the operation it belongs to."""
    return SelfReference(factory)


def parse_signature(key: str) -> tuple[Signature, ...]:
    """Expand a signature key into every exact tag tuple it stands for."""
    if not isinstance(key, str):
        raise SignatureError(f"Signature must be a string, got {type(key).__name__}")
    params = [part.strip() for part in key.split(",")] if key.strip() else []
    alternatives: list[tuple[TypeTag, ...]] = []
    for param in params:
        names = [name.strip() for name in param.split("|")]
        if not param or any(not name for name in names):
            raise SignatureError(f"Empty type in signature {key!r}")
        try:
            tags = tuple(parse_tag(name) for name in names)
        except ValueError as exc:
            raise SignatureError(f"{exc} (in signature {key!r})") from None
        alternatives.append(tags)
    return tuple(product(*alternatives))


def format_signature(signature: Signature) -> str:
    return ", ".join(tag.value for tag in signature)


class TypedFunction:
    """Callable operation dispatching on the runtime tags of its arguments.

    The catalog is fixed at construction. `to_tex` is free-form metadata for
    renderers and is never consulted when the function is called.
    """

    def __init__(self, name: str, signatures: Mapping[str, object]) -> None:
        if not name:
            raise SignatureError("Typed function requires a name")
        if not signatures:
            raise SignatureError(f"Typed function {name!r} requires at least one signature")
        self.name = name
        self.to_tex: dict[int, str] | None = None

        table: dict[Signature, Callable[..., object]] = {}
        for key, impl in signatures.items():
            if isinstance(impl, SelfReference):
                impl = impl.factory(self)
            if not callable(impl):
                raise SignatureError(f"Implementation for signature {key!r} of {name!r} is not callable")
            for signature in parse_signature(key):
                if signature in table:
                    raise SignatureError(
                        f"Signature ({format_signature(signature)}) is defined twice for function {name!r}"
                    )
                table[signature] = impl
        self._table = table
        self.signatures: Mapping[Signature, Callable[..., object]] = MappingProxyType(table)
        self.__name__ = name
        self.__qualname__ = name
        logger.debug("typed function %s built with %d signatures", name, len(table))

    def signature_strings(self) -> tuple[str, ...]:
        return tuple(format_signature(signature) for signature in self._table)

    def dispatch(self, *tags: TypeTag | str) -> Callable[..., object]:
        """Return the implementation registered for exactly `tags`."""
        signature = tuple(tag if isinstance(tag, TypeTag) else parse_tag(tag) for tag in tags)
        impl = self._table.get(signature)
        if impl is None:
            raise NoMatchingSignatureError(self.name, tuple(str(tag) for tag in signature), self.signature_strings())
        return impl

    def __call__(self, *args: object) -> object:
        tags: list[TypeTag] = []
        for arg in args:
            try:
                tags.append(resolve_tag(arg))
            except UnsupportedTypeError:
                raise UnsupportedTypeError(arg, operation=self.name) from None
        signature = tuple(tags)
        impl = self._table.get(signature)
        if impl is None:
            raise NoMatchingSignatureError(self.name, tuple(tag.value for tag in signature), self.signature_strings())
        return impl(*args)

    def __repr__(self) -> str:
        return f"<typed function {self.name} ({len(self._table)} signatures)>"


def typed(name: str, signatures: Mapping[str, object]) -> TypedFunction:
    return TypedFunction(name, signatures)
