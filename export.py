from __future__ import annotations

import logging
from datetime import date
from io import BytesIO
from typing import Any, Iterable, Mapping, Optional, Union

import matplotlib.pyplot as plt

from gantt_models import GanttOptions, TaskLike
from public_holidays import HolidayTable
from renderer import GanttChart, create_gantt

logger = logging.getLogger(__name__)


def _save(chart: GanttChart, fmt: str) -> bytes:
    bio = BytesIO()
    try:
        chart.figure.savefig(bio, format=fmt, dpi=chart.figure.dpi, facecolor="white")
    finally:
        # Important: close to avoid memory growth when rendering repeatedly
        chart.disconnect()
        plt.close(chart.figure)
    data = bio.getvalue()
    logger.debug("Exported Gantt chart as %s (%d bytes)", fmt, len(data))
    return data


def export_svg_bytes(
    tasks: Optional[Iterable[TaskLike]],
    options: Union[GanttOptions, Mapping[str, Any], None] = None,
    *,
    holidays: Optional[HolidayTable] = None,
    today: Optional[date] = None,
) -> bytes:
    """Static SVG of the chart, for embedding in a document."""
    chart = create_gantt(tasks, options, holidays=holidays, today=today)
    return _save(chart, "svg")


def export_png_bytes(
    tasks: Optional[Iterable[TaskLike]],
    options: Union[GanttOptions, Mapping[str, Any], None] = None,
    *,
    holidays: Optional[HolidayTable] = None,
    today: Optional[date] = None,
) -> bytes:
    chart = create_gantt(tasks, options, holidays=holidays, today=today)
    return _save(chart, "png")
