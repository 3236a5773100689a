from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import List, Optional, Tuple

from house_sales.config import TOOLTIP_FADE_IN_MS, TOOLTIP_FADE_OUT_MS, TOOLTIP_OFFSET, TOOLTIP_OPACITY

Pointer = Tuple[float, float]


def tooltip_html(title: str, rows: List[Tuple[str, str]]) -> str:
    parts = [f"<b>{escape(title)}</b>"]
    parts.extend(f"<b>{escape(label)}:</b> {escape(value)}" for label, value in rows)
    return "<br>".join(parts)


@dataclass
class Tooltip:
    """Floating detail box shared by a scene; hidden until a hover shows it.

    `left`, `top` and `fade_ms` place and fade the box next to the pointer
    when the chart draws it in the browser. The Streamlit layout renders the
    same body under the chart and only reads `visible`.
    """

    title: str = ""
    rows: List[Tuple[str, str]] = field(default_factory=list)
    left: float = 0.0
    top: float = 0.0
    opacity: float = 0.0
    fade_ms: int = 0

    @property
    def visible(self) -> bool:
        return self.opacity > 0

    def show(self, title: str, rows: List[Tuple[str, str]], pointer: Optional[Pointer] = None) -> None:
        self.title = title
        self.rows = rows
        if pointer is not None:
            self.left = pointer[0] + TOOLTIP_OFFSET[0]
            self.top = pointer[1] + TOOLTIP_OFFSET[1]
        self.opacity = TOOLTIP_OPACITY
        self.fade_ms = TOOLTIP_FADE_IN_MS

    def hide(self) -> None:
        self.opacity = 0.0
        self.fade_ms = TOOLTIP_FADE_OUT_MS

    def to_html(self) -> str:
        return tooltip_html(self.title, self.rows)
