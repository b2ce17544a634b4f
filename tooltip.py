from __future__ import annotations

from typing import Optional, Tuple

from matplotlib.text import Text

# Distance between the pointer and the tooltip's top-left corner.
POINTER_OFFSET = 5


class TooltipState:
    """
    Hidden <-> visible state of the single tooltip shared by one chart.

    The hover methods are what the host event system calls:
      - on_hover_enter(element_id, payload): payload is the element's tooltip
        text; None or blank leaves the tooltip hidden.
      - on_hover_move(x, y): follows the pointer.
      - on_hover_leave(): hides it.
    """

    def __init__(self) -> None:
        self.text = ""
        self.visible = False
        self.x = 0.0
        self.y = 0.0
        self.element_id: Optional[str] = None

    def show(self, text: str) -> None:
        self.text = text
        self.visible = True

    def reposition(self, x: float, y: float) -> None:
        self.x = x + POINTER_OFFSET
        self.y = y + POINTER_OFFSET

    def hide(self) -> None:
        # Text is left as is; the next show() overwrites it.
        self.visible = False

    def on_hover_enter(self, element_id: str, payload: Optional[str]) -> None:
        self.element_id = element_id
        if payload and payload.strip():
            self.show(payload)

    def on_hover_move(self, x: float, y: float) -> None:
        self.reposition(x, y)

    def on_hover_leave(self) -> None:
        self.element_id = None
        self.hide()


class Tooltip(TooltipState):
    """
    TooltipState drawn as a matplotlib Text.

    The artist is created hidden and detached; call mount() with the axes
    whose data coordinates the hover positions are expressed in.
    """

    def __init__(self, fontsize: float = 9) -> None:
        super().__init__()
        self.artist = Text(
            0,
            0,
            "",
            visible=False,
            ha="left",
            va="top",
            fontsize=fontsize,
            color="#1A1A1A",
            zorder=10,
            clip_on=False,
            bbox=dict(boxstyle="round,pad=0.3", facecolor="#FFFFE0", edgecolor="#7F7F7F", linewidth=0.8),
        )
        self.artist.set_gid("gantt-tooltip")
        # What the canvas currently shows; None forces the next redraw.
        self._drawn: Optional[Tuple] = None

    @property
    def mounted(self) -> bool:
        return self.artist.axes is not None

    def mount(self, axes) -> None:
        if self.mounted:
            return
        axes.add_artist(self.artist)
        self._drawn = None
        self._sync()

    def show(self, text: str) -> None:
        super().show(text)
        self._sync()

    def reposition(self, x: float, y: float) -> None:
        super().reposition(x, y)
        self._sync()

    def hide(self) -> None:
        super().hide()
        self._sync()

    def _sync(self) -> None:
        self.artist.set_text(self.text)
        self.artist.set_position((self.x, self.y))
        self.artist.set_visible(self.visible)
        if not self.mounted or self.artist.figure is None:
            return
        # A hidden tooltip looks the same wherever it is.
        shown = (True, self.text, self.x, self.y) if self.visible else (False,)
        if shown == self._drawn:
            return
        self._drawn = shown
        self.artist.figure.canvas.draw_idle()
