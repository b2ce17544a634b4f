from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from date_utils import (
    Month,
    date_range,
    day_name,
    earliest_of,
    is_weekend,
    latest_of,
    month_label,
    month_range,
    span_contains,
    to_days,
)
from gantt_models import GanttOptions, Span, Task
from public_holidays import HolidayTable

logger = logging.getLogger(__name__)

# Header rows above the task rows: month names (row 0) and day numbers (row 1).
HEADER_ROWS = 2
CORNER_RADIUS = 4
LABEL_GAP = 5


@dataclass(frozen=True)
class GanttLayout:
    first_day: date
    last_day: date
    days: Tuple[date, ...]
    months: Tuple[Month, ...]
    task_count: int
    cell_width: float
    cell_height: float
    y_axis_width: float
    width: float
    height: float

    def day_offset(self, d: date) -> int:
        """Columns between first_day and d."""
        return to_days(d - self.first_day)

    def column_x(self, d: date) -> float:
        return self.y_axis_width + self.day_offset(d) * self.cell_width

    def row_y(self, row: int) -> float:
        return row * self.cell_height


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle in scene pixels, origin top-left."""

    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        # Degenerate (negative) extents are normalised before testing.
        x0, x1 = sorted((self.x, self.x + self.width))
        y0, y1 = sorted((self.y, self.y + self.height))
        return x0 <= px <= x1 and y0 <= py <= y1


@dataclass(frozen=True)
class HeaderCell:
    box: Box
    label: str


@dataclass(frozen=True)
class Highlight:
    """Weekend or holiday column; hovering shows `tooltip`."""

    element_id: str
    day: date
    box: Box
    tooltip: str


@dataclass(frozen=True)
class SpanBar:
    element_id: str
    box: Box
    brief: str
    classes: Tuple[str, ...]
    tooltip: Optional[str]


@dataclass(frozen=True)
class TaskRow:
    element_id: str
    name: str
    # Hover area of the right-aligned name, inside the y axis.
    label_box: Box
    label_x: float
    label_y: float
    tooltip: Optional[str]
    bars: Tuple[SpanBar, ...]


@dataclass(frozen=True)
class GanttScene:
    layout: GanttLayout
    month_bands: Tuple[HeaderCell, ...]
    day_cells: Tuple[HeaderCell, ...]
    weekends: Tuple[Highlight, ...]
    holidays: Tuple[Highlight, ...]
    rows: Tuple[TaskRow, ...]
    today: Optional[Box]

    def interactive(self) -> List[Tuple[str, Box, Optional[str]]]:
        """(element_id, box, tooltip) for every hoverable element, bottom to top."""
        out: List[Tuple[str, Box, Optional[str]]] = []
        for h in self.weekends:
            out.append((h.element_id, h.box, h.tooltip))
        for h in self.holidays:
            out.append((h.element_id, h.box, h.tooltip))
        for row in self.rows:
            for bar in row.bars:
                out.append((bar.element_id, bar.box, bar.tooltip))
        for row in self.rows:
            out.append((row.element_id, row.label_box, row.tooltip))
        return out

    def hit_test(self, x: float, y: float) -> Optional[Tuple[str, Optional[str]]]:
        """Topmost hoverable element under (x, y) as (element_id, tooltip)."""
        for element_id, box, tooltip in reversed(self.interactive()):
            if box.contains(x, y):
                return element_id, tooltip
        return None


def compute_date_bounds(tasks: Sequence[Task], today: date) -> Tuple[date, date]:
    """
    Returns (first_day, last_day) over every span bound.
    Without any span both collapse to `today`.
    """
    last_day: Optional[date] = None
    for t in tasks:
        for s in t.spans:
            hi = latest_of(s.start, s.end)
            last_day = hi if last_day is None else latest_of(last_day, hi)
    if last_day is None:
        last_day = today

    first_day = last_day
    for t in tasks:
        for s in t.spans:
            first_day = earliest_of(first_day, earliest_of(s.start, s.end))
    return first_day, last_day


def compute_layout(tasks: Sequence[Task], options: GanttOptions, today: date) -> GanttLayout:
    first_day, last_day = compute_date_bounds(tasks, today)
    days = tuple(date_range(first_day, last_day))
    months = tuple(month_range(first_day, last_day))

    width = options.cell_width * len(days) + options.y_axis_width
    height = (len(tasks) + HEADER_ROWS) * options.cell_height

    logger.debug(
        "Gantt layout: %s -> %s, %d days, %d months, %d tasks, %sx%s px",
        first_day, last_day, len(days), len(months), len(tasks), width, height,
    )
    return GanttLayout(
        first_day=first_day,
        last_day=last_day,
        days=days,
        months=months,
        task_count=len(tasks),
        cell_width=options.cell_width,
        cell_height=options.cell_height,
        y_axis_width=options.y_axis_width,
        width=width,
        height=height,
    )


def classify_span(start: date, end: date, today: date) -> Tuple[bool, bool, bool]:
    """Returns (active, past, future) for a span relative to `today`."""
    active = span_contains(start, end, today)
    past = end < today
    future = today < start
    return active, past, future


def span_classes(span: Span, today: date) -> Tuple[str, ...]:
    active, past, future = classify_span(span.start, span.end, today)
    classes = ["gantt-task", "gantt-task-active" if active else "gantt-task-inactive"]
    if past:
        classes.append("gantt-task-past")
    if future:
        classes.append("gantt-task-future")
    if span.classname:
        classes.append(span.classname)
    return tuple(classes)


def _highlight_box(layout: GanttLayout, d: date) -> Box:
    return Box(
        x=layout.column_x(d),
        y=layout.row_y(HEADER_ROWS),
        width=layout.cell_width - 1,
        height=layout.task_count * layout.cell_height - 1,
    )


def build_scene(
    layout: GanttLayout,
    tasks: Sequence[Task],
    holidays: HolidayTable,
    today: date,
) -> GanttScene:
    cw = layout.cell_width
    ch = layout.cell_height

    month_bands = tuple(
        HeaderCell(
            box=Box(x=layout.column_x(m.days[0]), y=layout.row_y(0), width=len(m.days) * cw - 1, height=ch),
            label=month_label(m.year, m.month),
        )
        for m in layout.months
    )

    day_cells = tuple(
        HeaderCell(
            box=Box(x=layout.y_axis_width + i * cw, y=layout.row_y(1), width=cw - 1, height=ch - 1),
            label=str(d.day),
        )
        for i, d in enumerate(layout.days)
    )

    weekends = tuple(
        Highlight(element_id=f"weekend:{d.isoformat()}", day=d, box=_highlight_box(layout, d), tooltip=day_name(d))
        for d in layout.days
        if is_weekend(d)
    )

    holiday_cells = tuple(
        Highlight(element_id=f"holiday:{h.date.isoformat()}", day=h.date, box=_highlight_box(layout, h.date), tooltip=h.brief)
        for h in holidays.matching(layout.days)
    )

    rows: List[TaskRow] = []
    for i, t in enumerate(tasks):
        y = layout.row_y(HEADER_ROWS + i)
        bars = tuple(
            SpanBar(
                element_id=f"span:{i}:{j}",
                box=Box(
                    x=layout.column_x(s.start),
                    y=y,
                    width=cw * (to_days(s.end - s.start) + 1) - 1,
                    height=ch - 1,
                ),
                brief=s.brief,
                classes=span_classes(s, today),
                tooltip=s.tooltip,
            )
            for j, s in enumerate(t.spans)
        )
        rows.append(
            TaskRow(
                element_id=f"task:{i}",
                name=t.name,
                label_box=Box(x=0, y=y, width=layout.y_axis_width - LABEL_GAP, height=ch - 1),
                label_x=layout.y_axis_width - LABEL_GAP,
                label_y=y + ch / 2,
                tooltip=t.tooltip,
                bars=bars,
            )
        )

    today_box: Optional[Box] = None
    if span_contains(layout.first_day, layout.last_day, today):
        today_box = Box(
            x=layout.column_x(today),
            y=0,
            width=cw - 1,
            height=(HEADER_ROWS + layout.task_count) * ch - 1,
        )

    logger.debug(
        "Gantt scene: %d weekend cells, %d holiday cells, %d bars, today marker=%s",
        len(weekends), len(holiday_cells), sum(len(r.bars) for r in rows), today_box is not None,
    )
    return GanttScene(
        layout=layout,
        month_bands=month_bands,
        day_cells=day_cells,
        weekends=weekends,
        holidays=holiday_cells,
        rows=tuple(rows),
        today=today_box,
    )
