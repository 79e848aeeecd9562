from __future__ import annotations

import re
from typing import Any, Protocol

# (r, g, b) in 0..255 floats, alpha in 0..1.
RGBAColor = tuple[float, float, float, float]

_FUNC_RE = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)


class ColorMixer(Protocol):
    def mix(self, start: Any, target: Any, weight: float) -> Any:
        ...

    def to_interpolable_string(self, color: Any) -> str | None:
        ...


def parse_color(value: Any) -> RGBAColor | None:
    """Parse ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()``/``rgba()`` or an RGB(A) int tuple."""
    if isinstance(value, str):
        raw = value.strip()
        if raw.startswith("#"):
            return _parse_hex(raw[1:])
        match = _FUNC_RE.match(raw)
        if match:
            return _parse_func(match.group(1))
        return None
    if isinstance(value, tuple) and len(value) in (3, 4):
        if not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
            return None
        alpha = value[3] / 255.0 if len(value) == 4 else 1.0
        return (float(value[0]), float(value[1]), float(value[2]), alpha)
    return None


def rgba_string(color: RGBAColor) -> str:
    r, g, b, a = color
    return f"rgba({int(round(r))}, {int(round(g))}, {int(round(b))}, {_alpha_text(a)})"


def rgba_tuple(color: RGBAColor) -> tuple[int, int, int, int]:
    r, g, b, a = color
    return (int(round(r)), int(round(g)), int(round(b)), int(round(max(0.0, min(1.0, a)) * 255)))


class RGBAColorMixer:
    """Linear per-channel mix in RGBA space.

    Output follows the target's representation: strings come back as
    ``rgba(r, g, b, a)``, tuples as ``(r, g, b, a)`` ints with alpha in 0..255.
    """

    def mix(self, start: Any, target: Any, weight: float) -> Any:
        c0 = parse_color(start)
        c1 = parse_color(target)
        if c0 is None or c1 is None:
            return target
        w = max(0.0, min(1.0, float(weight)))
        mixed = tuple(a + (b - a) * w for a, b in zip(c0, c1))
        if isinstance(target, tuple):
            return rgba_tuple(mixed)  # type: ignore[arg-type]
        return rgba_string(mixed)  # type: ignore[arg-type]

    def to_interpolable_string(self, color: Any) -> str | None:
        parsed = parse_color(color)
        return None if parsed is None else rgba_string(parsed)


def _parse_hex(h: str) -> RGBAColor | None:
    try:
        if len(h) in (3, 4):
            channels = [int(c * 2, 16) for c in h]
        elif len(h) in (6, 8):
            channels = [int(h[i : i + 2], 16) for i in range(0, len(h), 2)]
        else:
            return None
    except ValueError:
        return None
    alpha = channels[3] / 255.0 if len(channels) == 4 else 1.0
    return (float(channels[0]), float(channels[1]), float(channels[2]), alpha)


def _parse_func(body: str) -> RGBAColor | None:
    parts = [p.strip() for p in body.split(",")]
    if len(parts) not in (3, 4):
        return None
    try:
        rgb = [_channel(p) for p in parts[:3]]
        alpha = _alpha(parts[3]) if len(parts) == 4 else 1.0
    except ValueError:
        return None
    return (rgb[0], rgb[1], rgb[2], alpha)


def _channel(text: str) -> float:
    if text.endswith("%"):
        return max(0.0, min(255.0, float(text[:-1]) * 2.55))
    return max(0.0, min(255.0, float(text)))


def _alpha(text: str) -> float:
    if text.endswith("%"):
        return max(0.0, min(1.0, float(text[:-1]) / 100.0))
    return max(0.0, min(1.0, float(text)))


def _alpha_text(alpha: float) -> str:
    text = f"{max(0.0, min(1.0, alpha)):.3f}".rstrip("0").rstrip(".")
    return text or "0"
