"""
Shared fixtures for validation engine and widget tests.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future

import pytest
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QWidget

from core.threading import run_immediately
from core.validation_engine import ValidationEngine, ValidationOutcome


class InlineExecutor(Executor):
    """Runs submitted predicates on the calling thread."""

    def __init__(self):
        self.calls = []

    def submit(self, fn, /, *args, **kwargs):
        self.calls.append(args)
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class ManualExecutor(Executor):
    """Holds submitted predicates until the test runs them."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        self.pending.append((fn, args, future))
        return future

    def run(self, index=0):
        fn, args, future = self.pending.pop(index)
        try:
            future.set_result(fn(*args))
        except Exception as exc:
            future.set_exception(exc)

    def run_all(self):
        while self.pending:
            self.run()


class RecordingView:
    """ValidationView that records every call."""

    def __init__(self):
        self.borders: list[QColor] = []
        self.outcomes: list[ValidationOutcome] = []

    def paint_border(self, color):
        self.borders.append(QColor(color))

    def render(self, outcome):
        self.outcomes.append(outcome)


@pytest.fixture
def inline_executor():
    return InlineExecutor()


@pytest.fixture
def manual_executor():
    return ManualExecutor()


@pytest.fixture
def recording_view():
    return RecordingView()


@pytest.fixture
def engine(recording_view, inline_executor):
    """Engine with black initial color and synchronous predicates."""
    engine = ValidationEngine(
        QColor("#000000"),
        recording_view,
        executor=inline_executor,
        run_on_owner_thread=run_immediately,
    )
    engine.neutral_color = QColor("#6c757d")
    engine.valid_color = QColor("#65c6bb")
    engine.error_color = QColor("#d24d57")
    engine.editing_color = QColor("#95a5a6")
    recording_view.borders.clear()
    return engine


@pytest.fixture
def host(qtbot):
    """Parent widget for fields under test."""
    widget = QWidget()
    widget.resize(400, 200)
    qtbot.addWidget(widget)
    return widget
