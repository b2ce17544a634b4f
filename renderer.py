from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch, Rectangle

from gantt_models import GanttOptions, TaskLike, coerce_options, coerce_tasks
from layout import CORNER_RADIUS, Box, GanttLayout, GanttScene, build_scene, compute_layout
from public_holidays import DEFAULT_HOLIDAYS, HolidayTable
from tooltip import Tooltip

logger = logging.getLogger(__name__)


HEADER_FACE = "#F6F8FB"
HEADER_TEXT = "#333333"
BORDER = "#DADADA"
WEEKEND_FACE = "#EFEFEF"
HOLIDAY_FACE = "#FDE68A"
TODAY_FACE = "#DC2626"
TASK_NAME_TEXT = "#222222"

# Bar colors by class. When several classes of a bar have a color, the last
# one wins, so a caller-supplied classname overrides the status color.
STATUS_STYLE = {
    "gantt-task": "#7F7F7F",
    "gantt-task-inactive": "#6B7280",
    "gantt-task-future": "#93C5FD",
    "gantt-task-past": "#9CA3AF",
    "gantt-task-active": "#2563EB",
}

_CLASS_PRIORITY = ["gantt-task", "gantt-task-inactive", "gantt-task-future", "gantt-task-past", "gantt-task-active"]


@dataclass
class GanttChart:
    """What create_gantt hands back: the figure to embed and its tooltip."""

    figure: Figure
    axes: Axes
    tooltip: Tooltip
    layout: GanttLayout
    scene: GanttScene
    hover: Optional[_HoverBinding] = None

    def disconnect(self) -> None:
        if self.hover is not None:
            self.hover.disconnect()
            self.hover = None


def _lighten_hex(hex_color: str, amount: float) -> str:
    """Blend a color with white. amount in [0, 1]."""
    r, g, b = mcolors.to_rgb(hex_color)
    r = r + (1.0 - r) * amount
    g = g + (1.0 - g) * amount
    b = b + (1.0 - b) * amount
    return mcolors.to_hex((r, g, b))


def bar_color(classes: Iterable[str], class_colors: Optional[Mapping[str, str]] = None) -> str:
    palette = dict(STATUS_STYLE)
    if class_colors:
        palette.update(class_colors)
    ranked = sorted(
        (c for c in classes if c in palette),
        key=lambda c: _CLASS_PRIORITY.index(c) if c in _CLASS_PRIORITY else len(_CLASS_PRIORITY),
    )
    return palette[ranked[-1]] if ranked else STATUS_STYLE["gantt-task"]


def _font_points(cell_height: float, dpi: float) -> float:
    # Text takes about half a row.
    return max(cell_height * 0.5 * 72.0 / dpi, 1.0)


def _box_patch(box: Box, *, rounded: bool, **kwargs):
    if rounded and box.width > 2 * CORNER_RADIUS and box.height > 2 * CORNER_RADIUS:
        return FancyBboxPatch(
            (box.x, box.y),
            box.width,
            box.height,
            boxstyle=f"round,pad=0,rounding_size={CORNER_RADIUS}",
            **kwargs,
        )
    return Rectangle((box.x, box.y), box.width, box.height, **kwargs)


class _HoverBinding:
    """Feeds matplotlib pointer events to the tooltip through the scene hit-test."""

    def __init__(self, scene: GanttScene, tooltip: Tooltip, axes: Axes):
        self.scene = scene
        self.tooltip = tooltip
        self.axes = axes
        self.connection_ids: List[int] = []

    def connect(self, canvas) -> "_HoverBinding":
        # The canvas only holds weak references to bound methods: whoever
        # connects must keep this object alive.
        self.connection_ids = [
            canvas.mpl_connect("motion_notify_event", self.on_motion),
            canvas.mpl_connect("axes_leave_event", self.on_leave),
            canvas.mpl_connect("figure_leave_event", self.on_leave),
        ]
        return self

    def disconnect(self) -> None:
        canvas = self.axes.figure.canvas
        for cid in self.connection_ids:
            canvas.mpl_disconnect(cid)
        self.connection_ids = []

    def on_motion(self, event) -> None:
        if event.inaxes is not self.axes or event.xdata is None or event.ydata is None:
            self.on_leave(event)
            return
        hit = self.scene.hit_test(event.xdata, event.ydata)
        element_id = hit[0] if hit else None
        if element_id != self.tooltip.element_id:
            if self.tooltip.element_id is not None:
                self.tooltip.on_hover_leave()
            if hit is not None:
                self.tooltip.on_hover_enter(*hit)
        if hit is not None:
            self.tooltip.on_hover_move(event.xdata, event.ydata)

    def on_leave(self, event=None) -> None:
        if self.tooltip.element_id is not None:
            self.tooltip.on_hover_leave()


def _draw_x_axis(ax: Axes, scene: GanttScene, fs: float) -> None:
    for band in scene.month_bands:
        b = band.box
        ax.add_patch(_box_patch(b, rounded=False, facecolor=HEADER_FACE, edgecolor=BORDER, linewidth=0.6, zorder=1))
        ax.text(b.x + b.width / 2.0, b.y + b.height / 2.0, band.label,
                ha="center", va="center", fontsize=fs, color=HEADER_TEXT, clip_on=True, zorder=2)

    for cell in scene.day_cells:
        b = cell.box
        ax.add_patch(_box_patch(b, rounded=False, facecolor=HEADER_FACE, edgecolor="none", zorder=1))
        ax.text(b.x + (b.width + 1) / 2.0, b.y + (b.height + 1) / 2.0, cell.label,
                ha="center", va="center", fontsize=fs, color=HEADER_TEXT, zorder=2)


def _draw_highlights(ax: Axes, scene: GanttScene) -> None:
    for h in scene.weekends:
        patch = _box_patch(h.box, rounded=True, facecolor=WEEKEND_FACE, edgecolor="none", zorder=2)
        patch.set_gid(h.element_id)
        ax.add_patch(patch)

    for h in scene.holidays:
        patch = _box_patch(h.box, rounded=True, facecolor=HOLIDAY_FACE, edgecolor="none", alpha=0.8, zorder=3)
        patch.set_gid(h.element_id)
        ax.add_patch(patch)


def _draw_tasks(ax: Axes, scene: GanttScene, fs: float, class_colors: Optional[Mapping[str, str]]) -> None:
    for row in scene.rows:
        for bar in row.bars:
            b = bar.box
            face = bar_color(bar.classes, class_colors)
            edge = face
            if "gantt-task-past" in bar.classes:
                face = _lighten_hex(face, 0.4)
            patch = _box_patch(b, rounded=True, facecolor=face, edgecolor=edge, linewidth=0.8, zorder=4)
            patch.set_gid(bar.element_id)
            ax.add_patch(patch)
            ax.text(b.x + (b.width + 1) / 2.0, b.y + (b.height + 1) / 2.0, bar.brief,
                    ha="center", va="center", fontsize=fs, color="white", zorder=5)

        label = ax.text(row.label_x, row.label_y, row.name,
                        ha="right", va="center", fontsize=fs, color=TASK_NAME_TEXT, zorder=5)
        label.set_gid(row.element_id)


def _draw_today(ax: Axes, scene: GanttScene) -> None:
    if scene.today is None:
        return
    patch = _box_patch(scene.today, rounded=True, facecolor=TODAY_FACE, edgecolor="none", alpha=0.25, zorder=6)
    patch.set_gid("gantt-today")
    ax.add_patch(patch)


def render_scene(
    scene: GanttScene,
    *,
    dpi: float = 100,
    class_colors: Optional[Mapping[str, str]] = None,
) -> Tuple[Figure, Axes, Tooltip, _HoverBinding]:
    """
    Draws a scene onto a new figure of layout.width x layout.height pixels.

    Axes data units are scene pixels with y growing downwards, so hover
    positions reported by matplotlib can be handed to the tooltip as is.
    Returns (fig, ax, tooltip, hover); the tooltip is not mounted and the
    hover binding stays connected only while a reference to it is kept.
    """
    layout = scene.layout
    dpi = dpi if dpi > 0 else 100
    width = max(layout.width, 1)
    height = max(layout.height, 1)

    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.axis("off")

    fs = _font_points(layout.cell_height, dpi)

    _draw_x_axis(ax, scene, fs)
    _draw_highlights(ax, scene)
    _draw_tasks(ax, scene, fs, class_colors)
    _draw_today(ax, scene)

    tooltip = Tooltip(fontsize=fs)
    hover = _HoverBinding(scene, tooltip, ax).connect(fig.canvas)
    return fig, ax, tooltip, hover


def create_gantt(
    tasks: Optional[Iterable[TaskLike]],
    options: Union[GanttOptions, Mapping[str, Any], None] = None,
    *,
    holidays: Optional[HolidayTable] = None,
    today: Optional[date] = None,
    class_colors: Optional[Mapping[str, str]] = None,
) -> GanttChart:
    """
    Builds the Gantt chart for `tasks`.

    `today` defaults to date.today() and drives the today marker and bar
    status; `holidays` defaults to the French 2024 table. The returned
    tooltip is hidden and detached: mount it with chart.tooltip.mount(chart.axes).
    """
    task_list = coerce_tasks(tasks)
    opts = coerce_options(options)
    if isinstance(today, datetime):
        today = today.date()
    today = today or date.today()
    holidays = holidays if holidays is not None else DEFAULT_HOLIDAYS

    layout = compute_layout(task_list, opts, today)
    scene = build_scene(layout, task_list, holidays, today)
    fig, ax, tooltip, hover = render_scene(scene, dpi=opts.dpi, class_colors=class_colors)

    logger.debug("Rendered Gantt chart with %d tasks (%sx%s px)", len(task_list), layout.width, layout.height)
    return GanttChart(figure=fig, axes=ax, tooltip=tooltip, layout=layout, scene=scene, hover=hover)
