from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence

from PIL import ImageFont

from luvatrix_chart.defaults import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX


MONO_FONT_FALLBACK_PATTERNS = (
    "comicmono",
    "comic mono",
    "menlo",
    "monaco",
    "courier new",
    "courier",
    "dejavusansmono",
    "dejavu sans mono",
)

Label = str | Sequence[str] | None


@dataclass(frozen=True)
class FontSpec:
    family: str = DEFAULT_FONT_FAMILY
    size: float = DEFAULT_FONT_SIZE_PX
    style: str = "normal"
    line_height: float = 1.2

    @property
    def line_height_px(self) -> float:
        return self.size * self.line_height

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None, base: "FontSpec | None" = None) -> "FontSpec":
        base = base or cls()
        if not options:
            return base
        return cls(
            family=str(options.get("family", base.family)),
            size=float(options.get("size", base.size)),
            style=str(options.get("style", base.style)),
            line_height=float(options.get("line_height", base.line_height)),
        )


class TextMeasurer(Protocol):
    def measure_text_width(self, text: str, font: FontSpec) -> float:
        ...

    def line_height(self, font: FontSpec) -> float:
        ...


class PillowTextMeasurer:
    """Measures text extents with the Pillow font the luvatrix raster stack would draw with."""

    def measure_text_width(self, text: str, font: FontSpec) -> float:
        if not text:
            return 0.0
        pil_font = _load_font(font.family, font.size, font.style)
        left, _, right, _ = pil_font.getbbox(text)
        return float(max(0, right - left))

    def line_height(self, font: FontSpec) -> float:
        return font.line_height_px


@dataclass(frozen=True)
class MonospaceTextMeasurer:
    """Headless measurer: every glyph advances ``char_ratio * font.size`` pixels."""

    char_ratio: float = 0.6

    def __post_init__(self) -> None:
        if self.char_ratio <= 0:
            raise ValueError("char_ratio must be > 0")

    def measure_text_width(self, text: str, font: FontSpec) -> float:
        return float(len(text)) * self.char_ratio * font.size

    def line_height(self, font: FontSpec) -> float:
        return font.line_height_px


class TextMeasureCache:
    """Caches ``(font, text)`` widths; :meth:`collect` evicts stale entries.

    Every lookup, hit or miss, advances a measurement counter. An entry is
    stale once it has not been touched within the last ``keep`` measurements.
    """

    def __init__(self, measurer: TextMeasurer) -> None:
        self._measurer = measurer
        self._entries: dict[tuple[FontSpec, str], tuple[float, int]] = {}
        self._serial = 0
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def measurer(self) -> TextMeasurer:
        return self._measurer

    @property
    def serial(self) -> int:
        return self._serial

    def measure_text_width(self, text: str, font: FontSpec) -> float:
        self._serial += 1
        key = (font, text)
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            width = float(self._measurer.measure_text_width(text, font))
        else:
            self.hits += 1
            width = entry[0]
        self._entries[key] = (width, self._serial)
        return width

    def line_height(self, font: FontSpec) -> float:
        return self._measurer.line_height(font)

    def collect(self, keep: int) -> int:
        if keep < 0:
            raise ValueError("keep must be >= 0")
        threshold = self._serial - keep
        stale = [key for key, (_, last_used) in self._entries.items() if last_used <= threshold]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


@dataclass(frozen=True)
class LabelSize:
    width: float = 0.0
    height: float = 0.0
    offset: float = 0.0


@dataclass(frozen=True)
class LabelSizes:
    first: LabelSize
    last: LabelSize
    widest: LabelSize
    highest: LabelSize
    widths: tuple[float, ...] = ()
    heights: tuple[float, ...] = ()


def measure_label(label: Label, font: FontSpec, measurer: TextMeasurer) -> LabelSize:
    line_height = measurer.line_height(font)
    if label is None:
        return LabelSize(0.0, 0.0, line_height / 2.0)
    lines = [label] if isinstance(label, str) else [line for line in label if line is not None]
    width = 0.0
    for line in lines:
        width = max(width, measurer.measure_text_width(str(line), font))
    return LabelSize(width=width, height=line_height * len(lines), offset=line_height / 2.0)


def compute_label_sizes(
    labels: Sequence[Label],
    font: FontSpec,
    measurer: TextMeasurer,
    *,
    major_flags: Sequence[bool] | None = None,
    major_font: FontSpec | None = None,
) -> LabelSizes:
    start = pass_start(measurer)
    sizes: list[LabelSize] = []
    for idx, label in enumerate(labels):
        is_major = bool(major_flags[idx]) if major_flags is not None else False
        sizes.append(measure_label(label, major_font if (is_major and major_font) else font, measurer))
    end_pass(measurer, start)
    if not sizes:
        empty = LabelSize()
        return LabelSizes(first=empty, last=empty, widest=empty, highest=empty)
    widest = max(range(len(sizes)), key=lambda i: sizes[i].width)
    highest = max(range(len(sizes)), key=lambda i: sizes[i].height)
    return LabelSizes(
        first=sizes[0],
        last=sizes[-1],
        widest=sizes[widest],
        highest=sizes[highest],
        widths=tuple(s.width for s in sizes),
        heights=tuple(s.height for s in sizes),
    )


def pass_start(measurer: TextMeasurer) -> int | None:
    """Measurement counter at the start of a pass; ``None`` for uncached measurers."""
    return measurer.serial if isinstance(measurer, TextMeasureCache) else None


def end_pass(measurer: TextMeasurer, start: int | None) -> None:
    """Drop cache entries that the pass begun at ``start`` did not touch."""
    if start is not None and isinstance(measurer, TextMeasureCache):
        measurer.collect(keep=measurer.serial - start)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float, style: str) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family, bold=style == "bold")
    if font_path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default()


@lru_cache(maxsize=32)
def _resolve_font_path(font_family: str, *, bold: bool = False) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + MONO_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        matches = [path for path in candidates if p in path.stem.lower().replace(" ", "")]
        if not matches:
            continue
        if bold:
            for path in matches:
                if "bold" in path.stem.lower():
                    return path
        for path in matches:
            if "bold" not in path.stem.lower():
                return path
        return matches[0]
    return None
