"""
Scoring Function Shapes

A shape is the list of breakpoints of a broken linear function that turns a
resource utilization position into a priority. Breakpoints are validated
against a domain chosen at construction time and stored as exact fractions
in normalized [0, 1] units, so a single interpolation routine serves both
the integer [0, 100] -> [0, max_priority] domain and the normalized one.

Preference polarity lives in the chosen y values only: a decreasing curve
favours idle nodes, an increasing one favours busy nodes.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Iterable, Sequence, Tuple

from .errors import InvalidShapeError

Number = Any  # int, float, Decimal or Fraction

DEFAULT_MAX_PRIORITY = 10
MAX_UTILIZATION = 100


def _format_number(value: Number) -> str:
    """Render a number the way the caller wrote it."""
    if isinstance(value, Fraction):
        if value.denominator == 1:
            return str(value.numerator)
        return str(float(value))
    return str(value)


@dataclass(frozen=True)
class Domain:
    """Bounds every breakpoint of a shape must lie within."""

    min_x: Number
    max_x: Number
    min_y: Number
    max_y: Number
    name: str = "custom"

    def __post_init__(self):
        if Fraction(self.max_x) <= Fraction(self.min_x):
            raise ValueError("max_x must be greater than min_x")

        if Fraction(self.max_y) <= Fraction(self.min_y):
            raise ValueError("max_y must be greater than min_y")

    @classmethod
    def normalized(cls) -> "Domain":
        return cls(0, 1, 0, 1, name="normalized")

    @classmethod
    def integer(cls, max_priority: int = DEFAULT_MAX_PRIORITY) -> "Domain":
        return cls(0, MAX_UTILIZATION, 0, max_priority, name="integer")

    @property
    def x_span(self) -> Fraction:
        return Fraction(self.max_x) - Fraction(self.min_x)

    @property
    def y_span(self) -> Fraction:
        return Fraction(self.max_y) - Fraction(self.min_y)

    def normalize_x(self, value: Number) -> Fraction:
        return (Fraction(value) - Fraction(self.min_x)) / self.x_span

    def normalize_y(self, value: Number) -> Fraction:
        return (Fraction(value) - Fraction(self.min_y)) / self.y_span

    def denormalize_x(self, value: Fraction) -> Fraction:
        return Fraction(self.min_x) + value * self.x_span

    def denormalize_y(self, value: Fraction) -> Fraction:
        return Fraction(self.min_y) + value * self.y_span


@dataclass(frozen=True)
class Shape:
    """Validated, immutable breakpoints of a scoring function.

    Build instances with new_shape() or Shape.from_points(), which perform
    all precondition checks. Points are held normalized to [0, 1].
    """

    domain: Domain
    normalized_points: Tuple[Tuple[Fraction, Fraction], ...]

    @classmethod
    def from_points(cls, points: Iterable[Tuple[Number, Number]], domain: Domain = None) -> "Shape":
        """Create a shape from (x, y) pairs."""
        pairs = [tuple(point) for point in points]
        for index, pair in enumerate(pairs):
            if len(pair) != 2:
                raise InvalidShapeError(
                    f"point {index} must be an (x, y) pair, got {pair!r}", index=index, values=pair
                )
        return new_shape([p[0] for p in pairs], [p[1] for p in pairs], domain)

    def __len__(self) -> int:
        return len(self.normalized_points)

    @property
    def x(self) -> Tuple[Fraction, ...]:
        """Breakpoint positions in domain units."""
        return tuple(self.domain.denormalize_x(px) for px, _ in self.normalized_points)

    @property
    def y(self) -> Tuple[Fraction, ...]:
        """Breakpoint values in domain units."""
        return tuple(self.domain.denormalize_y(py) for _, py in self.normalized_points)

    @property
    def points(self) -> Tuple[Tuple[Fraction, Fraction], ...]:
        return tuple(zip(self.x, self.y))

    def __str__(self) -> str:
        rendered = ",".join(f"{_format_number(px)}={_format_number(py)}" for px, py in self.points)
        return f"Shape({rendered}, domain={self.domain.name})"


def _to_fraction(axis: str, index: int, value: Number) -> Fraction:
    try:
        return Fraction(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidShapeError(
            f"values in {axis} must be finite numbers. {axis}[{index}]=={value!r}",
            index=index,
            values=(value,),
        ) from None


def new_shape(x: Sequence[Number], y: Sequence[Number], domain: Domain = None) -> Shape:
    """Create a Shape, performing every sanity check on the breakpoints.

    Args:
        x: Breakpoint positions, strictly increasing.
        y: Function values at those positions. Need not be monotonic.
        domain: Bounds for x and y. Defaults to the integer domain
            x in [0, 100], y in [0, 10].

    Raises:
        InvalidShapeError: On length mismatch, empty input, non-numeric
            values, non-increasing x, or values outside the domain.
    """
    if domain is None:
        domain = Domain.integer()

    # Snapshot the caller's sequences before looking at them.
    xs = tuple(x)
    ys = tuple(y)

    if len(xs) != len(ys):
        raise InvalidShapeError(
            f"length of x({len(xs)}) does not match length of y({len(ys)})",
            values=(len(xs), len(ys)),
        )

    n = len(xs)
    if n == 0:
        raise InvalidShapeError("shape must contain at least one point")

    fx = [_to_fraction("x", i, v) for i, v in enumerate(xs)]
    fy = [_to_fraction("y", i, v) for i, v in enumerate(ys)]

    for i in range(1, n):
        if fx[i - 1] >= fx[i]:
            raise InvalidShapeError(
                f"values in x must be increasing. "
                f"x[{i - 1}]=={_format_number(xs[i - 1])} >= x[{i}]=={_format_number(xs[i])}",
                index=i,
                values=(xs[i - 1], xs[i]),
            )

    bounds = (
        ("x", xs, fx, domain.min_x, domain.max_x),
        ("y", ys, fy, domain.min_y, domain.max_y),
    )
    for i in range(n):
        for axis, raw, exact, low, high in bounds:
            if exact[i] < Fraction(low):
                raise InvalidShapeError(
                    f"values in {axis} must not be less than {_format_number(low)}. "
                    f"{axis}[{i}]=={_format_number(raw[i])}",
                    index=i,
                    values=(raw[i],),
                )
            if exact[i] > Fraction(high):
                raise InvalidShapeError(
                    f"values in {axis} must not be greater than {_format_number(high)}. "
                    f"{axis}[{i}]=={_format_number(raw[i])}",
                    index=i,
                    values=(raw[i],),
                )

    points = tuple((domain.normalize_x(px), domain.normalize_y(py)) for px, py in zip(fx, fy))
    return Shape(domain=domain, normalized_points=points)


def default_shape(max_priority: int = DEFAULT_MAX_PRIORITY) -> Shape:
    """Least-utilized-preferred curve: full score for an idle node, zero when saturated."""
    return new_shape([0, MAX_UTILIZATION], [max_priority, 0], Domain.integer(max_priority))


def most_requested_shape(max_priority: int = DEFAULT_MAX_PRIORITY) -> Shape:
    """Most-utilized-preferred curve: zero for an idle node, full score when saturated."""
    return new_shape([0, MAX_UTILIZATION], [0, max_priority], Domain.integer(max_priority))


__all__ = [
    "Domain",
    "Shape",
    "new_shape",
    "default_shape",
    "most_requested_shape",
    "DEFAULT_MAX_PRIORITY",
    "MAX_UTILIZATION",
]
