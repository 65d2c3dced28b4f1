"""
Broken Linear Function

Evaluates a Shape at an arbitrary position. With breakpoints x[0..n-1] and
y[0..n-1] the function f(p) is:

    y[0]    for p <= x[0]
    y[i]    for p == x[i]
    y[n-1]  for p >= x[n-1]

and linear between neighbouring breakpoints. Arithmetic is exact
(fractions.Fraction); callers round only when they produce a final score.
"""

from bisect import bisect_left
from fractions import Fraction
from typing import Tuple

from .shape import Number, Shape


class BrokenLinearFunction:
    """Piecewise-linear function over a validated Shape.

    Holds no mutable state; one instance may be shared by any number of
    threads.
    """

    __slots__ = ("_shape", "_xs", "_ys")

    def __init__(self, shape: Shape):
        self._shape = shape
        self._xs: Tuple[Fraction, ...] = tuple(px for px, _ in shape.normalized_points)
        self._ys: Tuple[Fraction, ...] = tuple(py for _, py in shape.normalized_points)

    @property
    def shape(self) -> Shape:
        return self._shape

    def __call__(self, p: Number) -> Fraction:
        """Evaluate at p given in domain x-units; returns domain y-units."""
        domain = self._shape.domain
        return domain.denormalize_y(self.evaluate_normalized(domain.normalize_x(p)))

    def evaluate_normalized(self, p: Number) -> Fraction:
        """Evaluate at a normalized position; returns a normalized value."""
        p = Fraction(p)
        xs, ys = self._xs, self._ys
        n = len(xs)

        if p <= xs[0]:
            return ys[0]
        if p >= xs[n - 1]:
            return ys[n - 1]

        # First breakpoint with x >= p; 0 < i < n here.
        i = bisect_left(xs, p)
        if xs[i] == p:
            return ys[i]

        return ys[i - 1] + (ys[i] - ys[i - 1]) * (p - xs[i - 1]) / (xs[i] - xs[i - 1])

    def __repr__(self) -> str:
        return f"BrokenLinearFunction({self._shape})"
