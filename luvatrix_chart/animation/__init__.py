from luvatrix_chart.animation.colors import ColorMixer, RGBAColorMixer, parse_color, rgba_string
from luvatrix_chart.animation.easing import EASING_FUNCTIONS, get_easing
from luvatrix_chart.animation.element import Element
from luvatrix_chart.animation.frames import FrameRateController, FrameScheduler, LoopFrameScheduler, ManualFrameScheduler
from luvatrix_chart.animation.interpolate import interpolate
from luvatrix_chart.animation.scheduler import AnimationScheduler, AnimationTask, SchedulerState, monotonic_ms

__all__ = [
    "AnimationScheduler",
    "AnimationTask",
    "ColorMixer",
    "EASING_FUNCTIONS",
    "Element",
    "FrameRateController",
    "FrameScheduler",
    "LoopFrameScheduler",
    "ManualFrameScheduler",
    "RGBAColorMixer",
    "SchedulerState",
    "get_easing",
    "interpolate",
    "monotonic_ms",
    "parse_color",
    "rgba_string",
]
