"""Exception types raised by the numeric core."""

from __future__ import annotations

from typing import Tuple

Shape = Tuple[int, int]


class CircuitNetError(Exception):
    """Base class for every error surfaced by circuitnet."""


class ShapeError(CircuitNetError, ValueError):
    """A matrix could not be constructed with the requested shape."""


class ShapeMismatch(ShapeError):
    """Two matrices are incompatible for the requested operation.

    With ``expected=True`` the message reads ``expected (RxC), got (RxC)``,
    ``left`` being the required shape and ``right`` the one supplied.
    """

    def __init__(
        self,
        operation: str,
        left: Shape,
        right: Shape,
        symbol: str = "vs",
        *,
        expected: bool = False,
    ) -> None:
        self.operation = operation
        self.left = tuple(left)
        self.right = tuple(right)
        if expected:
            detail = f"expected {_fmt(left)}, got {_fmt(right)}"
        else:
            detail = f"incompatible shapes {_fmt(left)} {symbol} {_fmt(right)}"
        super().__init__(f"{operation}: {detail}")


def _fmt(shape: Shape) -> str:
    return f"({shape[0]}x{shape[1]})"


class ConfigError(CircuitNetError, ValueError):
    """The layer configuration or run settings are malformed."""


class EmptyNetworkError(CircuitNetError, RuntimeError):
    """The network was used before any layers were built."""


__all__ = [
    "CircuitNetError",
    "ConfigError",
    "EmptyNetworkError",
    "Shape",
    "ShapeError",
    "ShapeMismatch",
]
