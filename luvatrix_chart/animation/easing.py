"""Robert Penner's easing equations, keyed by their usual camelCase names.

Every function maps ``t`` in ``[0, 1]`` to eased progress with ``f(0) == 0``
and ``f(1) == 1``. Elastic and back variants overshoot in between.
"""

from __future__ import annotations

import math
from typing import Callable

from luvatrix_chart.errors import UnknownEasingError

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in_quad(t: float) -> float:
    return t * t


def ease_out_quad(t: float) -> float:
    return -t * (t - 2)


def ease_in_out_quad(t: float) -> float:
    t *= 2
    if t < 1:
        return 0.5 * t * t
    t -= 1
    return -0.5 * (t * (t - 2) - 1)


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    t -= 1
    return t * t * t + 1


def ease_in_out_cubic(t: float) -> float:
    t *= 2
    if t < 1:
        return 0.5 * t * t * t
    t -= 2
    return 0.5 * (t * t * t + 2)


def ease_in_quart(t: float) -> float:
    return t * t * t * t


def ease_out_quart(t: float) -> float:
    t -= 1
    return -(t * t * t * t - 1)


def ease_in_out_quart(t: float) -> float:
    t *= 2
    if t < 1:
        return 0.5 * t * t * t * t
    t -= 2
    return -0.5 * (t * t * t * t - 2)


def ease_in_quint(t: float) -> float:
    return t * t * t * t * t


def ease_out_quint(t: float) -> float:
    t -= 1
    return t * t * t * t * t + 1


def ease_in_out_quint(t: float) -> float:
    t *= 2
    if t < 1:
        return 0.5 * t * t * t * t * t
    t -= 2
    return 0.5 * (t * t * t * t * t + 2)


def ease_in_sine(t: float) -> float:
    return -math.cos(t * (math.pi / 2)) + 1


def ease_out_sine(t: float) -> float:
    return math.sin(t * (math.pi / 2))


def ease_in_out_sine(t: float) -> float:
    return -0.5 * (math.cos(math.pi * t) - 1)


def ease_in_expo(t: float) -> float:
    return 0.0 if t == 0 else 2 ** (10 * (t - 1))


def ease_out_expo(t: float) -> float:
    return 1.0 if t == 1 else -(2 ** (-10 * t)) + 1


def ease_in_out_expo(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    t *= 2
    if t < 1:
        return 0.5 * 2 ** (10 * (t - 1))
    t -= 1
    return 0.5 * (-(2 ** (-10 * t)) + 2)


def ease_in_circ(t: float) -> float:
    if t >= 1:
        return t
    return -(math.sqrt(1 - t * t) - 1)


def ease_out_circ(t: float) -> float:
    t -= 1
    return math.sqrt(max(0.0, 1 - t * t))


def ease_in_out_circ(t: float) -> float:
    t *= 2
    if t < 1:
        return -0.5 * (math.sqrt(max(0.0, 1 - t * t)) - 1)
    t -= 2
    return 0.5 * (math.sqrt(max(0.0, 1 - t * t)) + 1)


def ease_in_elastic(t: float) -> float:
    if t in (0, 1):
        return float(t)
    p = 0.3
    s = p / 4
    t -= 1
    return -(2 ** (10 * t) * math.sin((t - s) * (2 * math.pi) / p))


def ease_out_elastic(t: float) -> float:
    if t in (0, 1):
        return float(t)
    p = 0.3
    s = p / 4
    return 2 ** (-10 * t) * math.sin((t - s) * (2 * math.pi) / p) + 1


def ease_in_out_elastic(t: float) -> float:
    if t in (0, 1):
        return float(t)
    p = 0.45
    s = p / 4
    t = t * 2 - 1
    if t < 0:
        return -0.5 * (2 ** (10 * t) * math.sin((t - s) * (2 * math.pi) / p))
    return 2 ** (-10 * t) * math.sin((t - s) * (2 * math.pi) / p) * 0.5 + 1


def ease_in_back(t: float) -> float:
    s = 1.70158
    return t * t * ((s + 1) * t - s)


def ease_out_back(t: float) -> float:
    s = 1.70158
    t -= 1
    return t * t * ((s + 1) * t + s) + 1


def ease_in_out_back(t: float) -> float:
    s = 1.70158 * 1.525
    t *= 2
    if t < 1:
        return 0.5 * (t * t * ((s + 1) * t - s))
    t -= 2
    return 0.5 * (t * t * ((s + 1) * t + s) + 2)


def ease_out_bounce(t: float) -> float:
    if t < 1 / 2.75:
        return 7.5625 * t * t
    if t < 2 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    t -= 2.625 / 2.75
    return 7.5625 * t * t + 0.984375


def ease_in_bounce(t: float) -> float:
    return 1 - ease_out_bounce(1 - t)


def ease_in_out_bounce(t: float) -> float:
    if t < 0.5:
        return ease_in_bounce(t * 2) * 0.5
    return ease_out_bounce(t * 2 - 1) * 0.5 + 0.5


EASING_FUNCTIONS: dict[str, EasingFn] = {
    "linear": linear,
    "easeInQuad": ease_in_quad,
    "easeOutQuad": ease_out_quad,
    "easeInOutQuad": ease_in_out_quad,
    "easeInCubic": ease_in_cubic,
    "easeOutCubic": ease_out_cubic,
    "easeInOutCubic": ease_in_out_cubic,
    "easeInQuart": ease_in_quart,
    "easeOutQuart": ease_out_quart,
    "easeInOutQuart": ease_in_out_quart,
    "easeInQuint": ease_in_quint,
    "easeOutQuint": ease_out_quint,
    "easeInOutQuint": ease_in_out_quint,
    "easeInSine": ease_in_sine,
    "easeOutSine": ease_out_sine,
    "easeInOutSine": ease_in_out_sine,
    "easeInExpo": ease_in_expo,
    "easeOutExpo": ease_out_expo,
    "easeInOutExpo": ease_in_out_expo,
    "easeInCirc": ease_in_circ,
    "easeOutCirc": ease_out_circ,
    "easeInOutCirc": ease_in_out_circ,
    "easeInElastic": ease_in_elastic,
    "easeOutElastic": ease_out_elastic,
    "easeInOutElastic": ease_in_out_elastic,
    "easeInBack": ease_in_back,
    "easeOutBack": ease_out_back,
    "easeInOutBack": ease_in_out_back,
    "easeInBounce": ease_in_bounce,
    "easeOutBounce": ease_out_bounce,
    "easeInOutBounce": ease_in_out_bounce,
}


def get_easing(value: str | EasingFn | None) -> EasingFn:
    if value is None:
        return linear
    if callable(value):
        return value
    fn = EASING_FUNCTIONS.get(str(value))
    if fn is None:
        raise UnknownEasingError(value)
    return fn
