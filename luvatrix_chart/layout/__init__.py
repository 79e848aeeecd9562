from luvatrix_chart.layout.box import LayoutBox
from luvatrix_chart.layout.engine import LayoutEngine
from luvatrix_chart.layout.legend import Legend
from luvatrix_chart.layout.title import Title

__all__ = ["LayoutBox", "LayoutEngine", "Legend", "Title"]
