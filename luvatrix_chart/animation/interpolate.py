from __future__ import annotations

import math
from typing import Any, MutableMapping, Mapping

from luvatrix_chart.animation.colors import ColorMixer, RGBAColorMixer

Model = MutableMapping[str, Any]

PRIVATE_PREFIX = "_"

_DEFAULT_MIXER = RGBAColorMixer()


def interpolate(
    start: Model,
    view: Model,
    target: Mapping[str, Any],
    progress: float,
    *,
    mixer: ColorMixer | None = None,
) -> Model:
    """Move ``view`` toward ``target`` by ``progress`` (0..1), in place.

    ``start`` records each field's origin the first time it moves, so repeated
    calls with growing progress stay anchored to the same origin. Fields new to
    ``view`` appear at their target value. Private fields are left alone.
    """
    mixer = mixer or _DEFAULT_MIXER
    for key, goal in target.items():
        if key not in view:
            view[key] = goal
        actual = view[key]
        if actual is goal or key.startswith(PRIVATE_PREFIX) or _same(actual, goal):
            continue
        if key not in start:
            start[key] = actual
        origin = start[key]

        if _is_number(origin) and _is_number(goal):
            view[key] = origin + (goal - origin) * progress
            continue
        if type(origin) is type(goal) and mixer.to_interpolable_string(origin) is not None:
            if mixer.to_interpolable_string(goal) is not None:
                view[key] = mixer.mix(origin, goal, progress)
                continue
        view[key] = goal
    return view


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _same(a: Any, b: Any) -> bool:
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False
