from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = str(v)
    return v if v.strip() else None


class Span(BaseModel):
    """
    One bar of a task. `start` and `end` are both included.

    start <= end is not checked: reversed bounds render as a degenerate bar.
    """

    start: date
    end: date
    brief: str = ""
    tooltip: Optional[str] = None
    classname: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _calendar_date(cls, v: Any) -> Any:
        # Instants keep only their local calendar date.
        if isinstance(v, datetime):
            return v.date()
        return v

    @field_validator("tooltip", "classname")
    @classmethod
    def _optional_text(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class Task(BaseModel):
    name: str
    spans: List[Span] = Field(default_factory=list)
    tooltip: Optional[str] = None

    @field_validator("tooltip")
    @classmethod
    def _optional_text(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class GanttOptions(BaseModel):
    """
    Chart geometry, in pixels.

    Each option can be given by its python name or its camelCase alias
    (`cellWidth`, `cellHeight`, `yAxisWidth`). Unknown keys are ignored and
    sizes are not range-checked.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    cell_width: float = Field(default=20, alias="cellWidth")
    cell_height: float = Field(default=20, alias="cellHeight")
    y_axis_width: float = Field(default=200, alias="yAxisWidth")
    dpi: float = Field(default=100)


TaskLike = Union[Task, Mapping[str, Any]]


def coerce_tasks(tasks: Optional[Iterable[TaskLike]]) -> List[Task]:
    """Validate plain mappings into Task models; Task instances pass through."""
    if tasks is None:
        return []
    return [t if isinstance(t, Task) else Task.model_validate(t) for t in tasks]


def coerce_options(options: Union[GanttOptions, Mapping[str, Any], None]) -> GanttOptions:
    if options is None:
        return GanttOptions()
    if isinstance(options, GanttOptions):
        return options
    return GanttOptions.model_validate(dict(options))
