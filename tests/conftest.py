import sys
from datetime import date
from pathlib import Path

# Headless backend before anything imports pyplot.
import matplotlib

matplotlib.use("Agg")

import pytest

# Root modules are imported directly by the tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    import matplotlib.pyplot as plt

    plt.close("all")


@pytest.fixture
def may_tasks():
    from gantt_models import Span, Task

    return [
        Task(
            name="Design",
            tooltip="Owned by the design team",
            spans=[
                Span(start=date(2024, 5, 6), end=date(2024, 5, 10), brief="draft", tooltip="First draft"),
                Span(start=date(2024, 5, 20), end=date(2024, 5, 22), brief="review", classname="milestone"),
            ],
        ),
        Task(
            name="Build",
            spans=[Span(start=date(2024, 5, 13), end=date(2024, 6, 3), brief="build")],
        ),
    ]
