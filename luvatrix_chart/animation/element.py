from __future__ import annotations

import math
from typing import Any, Mapping

from luvatrix_chart.animation.colors import ColorMixer
from luvatrix_chart.animation.interpolate import interpolate


class Element:
    """Drawable view-model holder.

    ``_model`` is the target state written by the chart on every update,
    ``_view`` is what the drawing step reads, ``_start`` the per-animation
    origin captured lazily by :func:`interpolate`.
    """

    def __init__(
        self,
        model: Mapping[str, Any] | None = None,
        *,
        dataset_index: int | None = None,
        index: int | None = None,
        mixer: ColorMixer | None = None,
    ) -> None:
        self.dataset_index = dataset_index
        self.index = index
        self.mixer = mixer
        self._model: dict[str, Any] = dict(model or {})
        self._view: dict[str, Any] | None = None
        self._start: dict[str, Any] | None = None

    @property
    def model(self) -> dict[str, Any]:
        return self._model

    @model.setter
    def model(self, value: Mapping[str, Any]) -> None:
        self._model = dict(value)

    @property
    def view(self) -> dict[str, Any]:
        return self._view if self._view is not None else self._model

    def pivot(self) -> "Element":
        if self._view is None:
            self._view = dict(self._model)
        self._start = {}
        return self

    def transition(self, progress: float) -> "Element":
        if not self._model or progress >= 1:
            self._view = dict(self._model)
            self._view["_dataset_index"] = self.dataset_index
            self._view["_index"] = self.index
            self._start = None
            return self
        if self._view is None:
            self._view = {}
        if self._start is None:
            self._start = {}
        interpolate(self._start, self._view, self._model, progress, mixer=self.mixer)
        return self

    def has_value(self) -> bool:
        x = self._model.get("x")
        y = self._model.get("y")
        return all(isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v) for v in (x, y))

    def __repr__(self) -> str:
        return f"Element(dataset_index={self.dataset_index}, index={self.index})"
