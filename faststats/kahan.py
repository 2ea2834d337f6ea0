"""Compensated floating-point summation (Kahan–Babuška / Neumaier)."""

from __future__ import annotations

from typing import Union

Number = Union[int, float]


def _kahan(a: float, b: float) -> tuple[float, float]:
    s = a + b
    return s, (a - s) + b


def _neumaier(a: float, b: float) -> tuple[float, float]:
    if abs(a) >= abs(b):
        return _kahan(a, b)
    return _kahan(b, a)


class NeumaierSum:
    """Running sum that carries a compensation term against cancellation."""

    __slots__ = ("_s", "_c")

    def __init__(self, value: Number = 0.0) -> None:
        self._s = float(value)
        self._c = 0.0

    def sum(self) -> float:
        """Return the compensated total."""
        return self._s + self._c

    def copy(self) -> NeumaierSum:
        clone = NeumaierSum()
        clone._s = self._s
        clone._c = self._c
        return clone

    def __iadd__(self, other: Union[Number, NeumaierSum]) -> NeumaierSum:
        if isinstance(other, NeumaierSum):
            s, c1 = _neumaier(self._s, other._s)
            c, _ = _neumaier(self._c + c1, other._c)
            self._s, self._c = s, c
            return self
        if isinstance(other, (int, float)):
            s, c = _neumaier(self._s, float(other))
            self._s = s
            self._c += c
            return self
        return NotImplemented

    def __add__(self, other: Union[Number, NeumaierSum]) -> NeumaierSum:
        if not isinstance(other, (int, float, NeumaierSum)):
            return NotImplemented
        result = self.copy()
        result += other
        return result

    def __radd__(self, other: Number) -> NeumaierSum:
        return self.__add__(other)

    def __float__(self) -> float:
        return self.sum()

    def __repr__(self) -> str:
        return f"NeumaierSum({self.sum()!r})"