"""Style record produced for the host tooltip element."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional


def format_px(value: float) -> str:
    if not math.isfinite(value):
        value = 0.0
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{round(value, 3)}px"


@dataclass(frozen=True)
class TooltipStyle:
    """Geometry applied to the tooltip; ``bottom`` is always left unconstrained.

    ``scale`` is the touch rendering factor. It is not part of the CSS output;
    hosts apply it to the tooltip text size themselves.
    """

    left: float
    top: float
    max_width: Optional[int] = None
    max_height: Optional[int] = None
    width: Optional[int] = None
    overflow_x: Optional[str] = None
    overflow_y: Optional[str] = None
    nowrap: bool = False
    scale: float = 1.0

    @property
    def bottom(self) -> str:
        return "auto"

    def as_css(self) -> Dict[str, str]:
        """Render as CSS-style property strings keyed by camelCase names."""
        css: Dict[str, str] = {
            "left": format_px(self.left),
            "top": format_px(self.top),
            "bottom": self.bottom,
        }
        if self.max_width is not None:
            css["maxWidth"] = format_px(self.max_width)
        if self.max_height is not None:
            css["maxHeight"] = format_px(self.max_height)
        if self.width is not None:
            css["width"] = format_px(self.width)
        if self.overflow_x is not None:
            css["overflowX"] = self.overflow_x
        if self.overflow_y is not None:
            css["overflowY"] = self.overflow_y
        if self.nowrap:
            css["whiteSpace"] = "nowrap"
        return css
