"""Minimal mutable unit-with-magnitude value."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class Unit:
    """A magnitude paired with a unit expression such as ``"m/s"``.

    Instances are mutable (`value` may be rescaled in place), so operations
    that must not alias their input return :meth:`clone`.
    """

    value: object
    unit: str

    def __post_init__(self) -> None:
        if not isinstance(self.unit, str) or not self.unit.strip():
            raise ValueError("Unit requires a non-empty unit expression")
        self.unit = self.unit.strip()

    def clone(self) -> "Unit":
        return Unit(self.value, self.unit)

    def equals(self, other: object) -> bool:
        return isinstance(other, Unit) and self.unit == other.unit and self.value == other.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"{self.value} {self.unit}"
