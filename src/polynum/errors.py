"""Structured error types for tag resolution, dispatch and coercion."""

from __future__ import annotations


class PolynumError(Exception):
    """Base class for structured polynum errors."""


class UnsupportedTypeError(PolynumError, TypeError):
    """A value belongs to no known type category at all."""

    def __init__(self, value: object, operation: str | None = None) -> None:
        self.type_name = type(value).__name__
        self.operation = operation
        message = f"Unsupported value of type {self.type_name!r}: no type tag matches"
        if operation is not None:
            message += f" (in function {operation!r})"
        super().__init__(message)


class NoMatchingSignatureError(PolynumError, TypeError):
    """Arguments have known tags but no signature of the operation covers them."""

    def __init__(self, name: str, tags: tuple[str, ...], signatures: tuple[str, ...] = ()) -> None:
        self.name = name
        self.tags = tags
        self.signatures = signatures
        super().__init__(self._format())

    def _format(self) -> str:
        rejected = ", ".join(self.tags) if self.tags else "<no arguments>"
        message = f"Unexpected argument types ({rejected}) for function {self.name!r}"
        if self.signatures:
            message += f"; expected one of: {'; '.join(self.signatures)}"
        return message


class SignatureError(PolynumError, ValueError):
    """Invalid signature catalog passed to ``typed``."""


class ConfigError(PolynumError, ValueError):
    """Invalid configuration value."""


class NumericConversionError(PolynumError, ValueError):
    """A boolean or string input could not be read as a number."""


class SkipZerosViolation(PolynumError, AssertionError):
    """A mapped function does not keep zero fixed although zeros are skipped."""
