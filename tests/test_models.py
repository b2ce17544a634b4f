from datetime import date, datetime

import pytest
from pydantic import ValidationError

from gantt_models import GanttOptions, Span, Task, coerce_options, coerce_tasks


def test_options_defaults():
    opts = GanttOptions()
    assert opts.cell_width == 20
    assert opts.cell_height == 20
    assert opts.y_axis_width == 200


def test_options_accept_camel_case_and_ignore_unknown_keys():
    opts = coerce_options({"cellWidth": 30, "yAxisWidth": 120, "colour": "red"})
    assert opts.cell_width == 30
    assert opts.cell_height == 20
    assert opts.y_axis_width == 120
    assert not hasattr(opts, "colour")


def test_options_accept_python_names():
    opts = coerce_options({"cell_height": 12})
    assert opts.cell_height == 12
    assert coerce_options(None) == GanttOptions()
    assert coerce_options(opts) is opts


def test_options_do_not_range_check_sizes():
    opts = coerce_options({"cellWidth": 0, "cellHeight": -5, "yAxisWidth": 12.5})
    assert opts.cell_width == 0
    assert opts.cell_height == -5
    assert opts.y_axis_width == 12.5


def test_coerce_tasks_from_mappings():
    tasks = coerce_tasks(
        [
            {
                "name": "A",
                "spans": [{"start": "2024-05-08", "end": "2024-05-09", "brief": "x"}],
            }
        ]
    )
    assert tasks == [Task(name="A", spans=[Span(start=date(2024, 5, 8), end=date(2024, 5, 9), brief="x")])]
    assert tasks[0].spans[0].tooltip is None
    assert tasks[0].spans[0].classname is None


def test_coerce_tasks_passes_models_through():
    t = Task(name="A")
    assert coerce_tasks([t])[0] is t
    assert coerce_tasks(None) == []


def test_reversed_span_is_accepted():
    s = Span(start=date(2024, 5, 9), end=date(2024, 5, 8))
    assert s.start > s.end


def test_blank_optional_text_becomes_none():
    s = Span(start=date(2024, 5, 8), end=date(2024, 5, 8), tooltip="  ", classname="")
    assert s.tooltip is None
    assert s.classname is None
    assert Task(name="A", tooltip="").tooltip is None


def test_unparseable_date_is_rejected():
    with pytest.raises(ValidationError):
        coerce_tasks([{"name": "A", "spans": [{"start": "soon", "end": "2024-05-08"}]}])


def test_datetime_bounds_keep_their_calendar_date():
    s = Span(start=datetime(2024, 5, 8, 9, 30), end=datetime(2024, 5, 9, 18, 0))
    assert s.start == date(2024, 5, 8)
    assert s.end == date(2024, 5, 9)
    assert type(s.start) is date
