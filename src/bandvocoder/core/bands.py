"""
Frequency Band Planning
=======================

Band center placement and the width -> Q mapping used by every band filter.
"""

import math
from numbers import Real
from typing import List

from bandvocoder.core import globals as G
from bandvocoder.core.exceptions import ValidationError


def log_frequencies(min_hz: float, max_hz: float, count: int) -> List[float]:
    """
    Generate logarithmically spaced frequencies.

    Consecutive values share the same ratio; the first and last values are
    min_hz and max_hz.

    Args:
        min_hz: Lowest frequency in Hz (> 0)
        max_hz: Highest frequency in Hz (> min_hz)
        count: Number of frequencies (>= 2)

    Returns:
        Ordered list of count frequencies in Hz

    Raises:
        ValidationError: If the range or count is invalid
    """
    if min_hz <= 0:
        raise ValidationError(f"min_hz must be positive, got {min_hz}", field="min_hz")
    if max_hz <= min_hz:
        raise ValidationError(
            f"max_hz ({max_hz}) must be greater than min_hz ({min_hz})", field="max_hz"
        )
    if count < 2:
        raise ValidationError(f"count must be at least 2, got {count}", field="count")

    log_min = math.log(min_hz)
    log_max = math.log(max_hz)
    step = (log_max - log_min) / (count - 1)
    return [math.exp(log_min + step * i) for i in range(count)]


def validate_width(width: float) -> float:
    """
    Check a user-facing width percentage.

    Raises:
        ValidationError: If width is not a finite number in [0, 100]
    """
    if isinstance(width, bool) or not isinstance(width, Real):
        raise ValidationError(f"Width must be a number, got {width!r}", field="width")
    width = float(width)
    if math.isnan(width) or not 0.0 <= width <= 100.0:
        raise ValidationError(f"Width must be between 0 and 100, got {width}", field="width")
    return width


def width_to_q(width: float, min_q: float = G.MIN_Q, max_q: float = G.MAX_Q) -> float:
    """
    Map width (0-100) to a filter Q factor.

    The mapping is linear and inverted: width 0 gives max_q (narrow,
    robotic), width 100 gives min_q (wide, breathy).

    Args:
        width: Width percentage in [0, 100]
        min_q: Q at width 100
        max_q: Q at width 0

    Returns:
        Q factor in [min_q, max_q]
    """
    width = validate_width(width)
    return max_q - (width / 100.0) * (max_q - min_q)

