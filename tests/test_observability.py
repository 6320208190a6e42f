"""
Tests for stage tracing
"""

from contextlib import contextmanager

import pytest

from place_harvester.infrastructure.observability import ObservabilityManager
from place_harvester.infrastructure import trace_decorator
from place_harvester.infrastructure.trace_decorator import traced


def test_disabled_manager_yields_no_span():
    manager = ObservabilityManager(enabled=False)

    with manager.create_span("harvest.stage.search") as span:
        assert span is None


def test_enabled_manager_reraises_inside_span():
    manager = ObservabilityManager(enabled=True)

    with pytest.raises(RuntimeError):
        with manager.create_span("harvest.stage.search"):
            raise RuntimeError("boom")


class Stage:
    @traced(span_name="harvest.stage.test")
    async def run(self, name: str, items: list) -> str:
        return f"{name}:{len(items)}"

    @traced(span_name="harvest.stage.fail")
    async def fail(self) -> None:
        raise ValueError("stage failed")


async def test_traced_returns_result():
    assert await Stage().run("search", [1, 2, 3]) == "search:3"


async def test_traced_reraises():
    with pytest.raises(ValueError, match="stage failed"):
        await Stage().fail()


class RecordingManager:
    """Captures spans and workflow steps instead of exporting them."""

    def __init__(self):
        self.spans = []
        self.steps = []

    @contextmanager
    def create_span(self, name, attributes=None):
        self.spans.append((name, attributes))
        yield None

    def record_workflow_step(self, **step):
        self.steps.append(step)


@pytest.fixture
def recording(monkeypatch):
    manager = RecordingManager()
    monkeypatch.setattr(trace_decorator, "get_observability_manager", lambda: manager)
    return manager


async def test_span_attributes_skip_self_and_count_lists(recording):
    await Stage().run("search", [1, 2, 3])

    name, attributes = recording.spans[0]
    assert name == "harvest.stage.test"
    assert attributes["harvest.stage.arg.name"] == "search"
    assert attributes["harvest.stage.arg.items.count"] == 3
    assert not any(key.endswith(".self") for key in attributes)


async def test_step_records_result_count(recording):
    class Lister:
        @traced(span_name="harvest.stage.list")
        async def run(self):
            return ["a", "b"]

    await Lister().run()

    step = recording.steps[0]
    assert step["success"] is True
    assert step["metadata"] == {"result_count": 2}


async def test_step_records_failure(recording):
    with pytest.raises(ValueError):
        await Stage().fail()

    step = recording.steps[0]
    assert step["success"] is False
    assert step["metadata"]["error"] == "ValueError: stage failed"
