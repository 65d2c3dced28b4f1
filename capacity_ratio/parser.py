"""
Shape Descriptor Parsing

Turns a configuration string such as "0=1,0.5=0.8,1=0" into a Shape. The
format is a comma separated sequence of x=y pairs, each pair being one
breakpoint of the broken linear function. Numbers are plain decimals without
exponents; no whitespace is accepted anywhere in the descriptor.

parse_shape() is a configuration-time entry point: every failure is raised
as ShapeParseError, which callers are expected to let abort startup.
"""

import re
from decimal import Decimal
from typing import List, Tuple

from .errors import InvalidShapeError, ShapeParseError
from .logging import get_logger
from .shape import Domain, Shape, new_shape

logger = get_logger(__name__)

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")


def _parse_number(token: str) -> Decimal:
    if not _NUMBER.fullmatch(token):
        raise ValueError(f"not a decimal number: {token!r}")
    return Decimal(token)


def parse_points(descriptor: str) -> List[Tuple[Decimal, Decimal]]:
    """Split a descriptor into (x, y) pairs without validating the shape.

    Raises:
        ShapeParseError: If a pair is malformed or a value is not a number.
    """
    points = []
    for point_desc in descriptor.split(","):
        xy = point_desc.split("=")
        if len(xy) != 2:
            raise ShapeParseError(descriptor)
        try:
            points.append((_parse_number(xy[0]), _parse_number(xy[1])))
        except ValueError:
            raise ShapeParseError(descriptor) from None
    return points


def parse_shape(descriptor: str, domain: Domain = None) -> Shape:
    """Parse a shape descriptor into a validated Shape.

    Args:
        descriptor: "x1=y1,x2=y2,..." with x strictly increasing.
        domain: Domain the numbers are written in. Defaults to the
            normalized domain x in [0, 1], y in [0, 1].

    Raises:
        ShapeParseError: On any tokenizing or validation failure.
    """
    if domain is None:
        domain = Domain.normalized()

    try:
        points = parse_points(descriptor)
    except ShapeParseError:
        logger.error("Cannot parse function shape", descriptor=descriptor)
        raise

    try:
        shape = new_shape([px for px, _ in points], [py for _, py in points], domain)
    except InvalidShapeError as e:
        logger.error("Invalid function shape", descriptor=descriptor, error=e.reason)
        raise ShapeParseError(descriptor, e.reason) from e

    logger.info("Parsed shape", shape=str(shape), points=len(shape))
    return shape
