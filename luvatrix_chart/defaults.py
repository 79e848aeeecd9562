from __future__ import annotations

from typing import Any, Mapping

from luvatrix_chart.config import freeze


DEFAULT_FONT_FAMILY = "Comic Mono"
DEFAULT_FONT_SIZE_PX = 12.0
DEFAULT_FRAME_MS = 1000.0 / 60.0


DEFAULTS: Mapping[str, Any] = freeze(
    {
        "font": {
            "family": DEFAULT_FONT_FAMILY,
            "size": DEFAULT_FONT_SIZE_PX,
            "style": "normal",
            "line_height": 1.2,
        },
        "layout": {
            "padding": 0,
            "max_rounds": 3,
        },
        "animation": {
            "duration": 1000,
            "easing": "easeOutQuart",
            "frame_ms": DEFAULT_FRAME_MS,
        },
        "title": {
            "display": False,
            "text": "",
            "position": "top",
            "weight": 2000,
            "full_width": True,
            "padding": 10,
            "font": {"style": "bold"},
        },
        "legend": {
            "display": True,
            "position": "top",
            "weight": 1000,
            "full_width": True,
            "labels": {"box_width": 40, "padding": 10},
        },
        "elements": {
            "point": {
                "radius": 3.0,
                "background_color": "rgba(0, 0, 0, 0.1)",
            },
            "bar": {
                "background_color": "rgba(0, 0, 0, 0.1)",
                "bar_percentage": 0.9,
                "category_percentage": 0.8,
            },
        },
        "scales": {},
    }
)


CHART_TYPE_DEFAULTS: Mapping[str, Mapping[str, Any]] = freeze(
    {
        "line": {
            "scales": {
                "x": {"type": "category", "position": "bottom"},
                "y": {"type": "linear", "position": "left"},
            },
        },
        "bar": {
            "scales": {
                "x": {"type": "category", "position": "bottom", "offset": True},
                "y": {"type": "linear", "position": "left", "begin_at_zero": True},
            },
        },
        "scatter": {
            "scales": {
                "x": {"type": "linear", "position": "bottom"},
                "y": {"type": "linear", "position": "left"},
            },
            "elements": {"point": {"radius": 4.0}},
        },
        "radar": {
            "scales": {
                "r": {"type": "radialLinear", "position": "chartArea"},
            },
            "elements": {"point": {"radius": 2.0}},
        },
    }
)


SCALE_DEFAULTS: Mapping[str, Mapping[str, Any]] = freeze(
    {
        "common": {
            "display": True,
            "position": "left",
            "weight": 0,
            "offset": False,
            "reverse": False,
            "stacked": None,
            "begin_at_zero": False,
            "min": None,
            "max": None,
            "suggested_min": None,
            "suggested_max": None,
            "grid_lines": {
                "draw_ticks": True,
                "tick_mark_length": 10,
            },
            "scale_label": {
                "display": False,
                "label_string": "",
                "padding": 4,
            },
            "ticks": {
                "display": True,
                "auto_skip": True,
                "auto_skip_padding": 0,
                "min_rotation": 0,
                "max_rotation": 50,
                "mirror": False,
                "padding": 0,
                "step_size": None,
                "precision": None,
                "max_ticks_limit": None,
                "callback": "values",
                "major": {"enabled": False},
            },
        },
        "linear": {
            "ticks": {"callback": "linear"},
        },
        "logarithmic": {
            "ticks": {"callback": "logarithmic", "major": {"enabled": True}},
        },
        "category": {
            "ticks": {"callback": "values"},
        },
        "radialLinear": {
            "position": "chartArea",
            "ticks": {"callback": "linear", "backdrop_padding": 2},
            "point_labels": {"display": True, "font": {"size": 10.0}},
        },
    }
)
