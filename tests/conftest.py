"""Shared fixtures: in-memory stores, a recording LLM and sample projects."""

import itertools
import threading
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from reports.domain import Comment, Project


class FakeGenerator:
    """Callable stand-in for llm.generate that records every prompt."""

    def __init__(self, reply="analysis text", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []
        self._lock = threading.Lock()

    def __call__(self, prompt):
        with self._lock:
            self.prompts.append(prompt)
            n = len(self.prompts)
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(prompt)
        return f"{self.reply} #{n}"

    @property
    def calls(self):
        return len(self.prompts)


_clock = itertools.count()


def _tick():
    return datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(microseconds=next(_clock))


class InMemoryStanceStore:
    def __init__(self):
        self.rows = []
        self.find_calls = 0
        self._lock = threading.Lock()

    def find(self, project_id, question_id):
        self.find_calls += 1
        for row in self.rows:
            if row.project_id == project_id and row.question_id == question_id:
                return row
        return None

    def insert(self, project_id, question_id, analysis, stance_analysis):
        row = SimpleNamespace(
            project_id=project_id,
            question_id=question_id,
            analysis=analysis,
            stance_analysis=stance_analysis,
            updated_at=_tick(),
        )
        with self._lock:
            self.rows.append(row)
        return row

    def upsert(self, project_id, question_id, analysis, stance_analysis):
        with self._lock:
            for row in self.rows:
                if row.project_id == project_id and row.question_id == question_id:
                    row.analysis = analysis
                    row.stance_analysis = stance_analysis
                    row.updated_at = _tick()
                    return row
        return self.insert(project_id, question_id, analysis, stance_analysis)


class InMemoryProjectStore:
    def __init__(self):
        self.rows = {}

    def find(self, project_id):
        return self.rows.get(project_id)

    def upsert(self, project_id, project_name, overall_analysis):
        row = SimpleNamespace(
            project_id=project_id,
            project_name=project_name,
            overall_analysis=overall_analysis,
            updated_at=_tick(),
        )
        self.rows[project_id] = row
        return row


class FailingStore:
    def __init__(self, error):
        self.error = error

    def find(self, *args):
        raise self.error

    def upsert(self, *args):
        raise self.error


class RecordingEvents:
    """ReportEvents look-alike that keeps checkpoints in a list."""

    def __init__(self):
        self.events = []
        self.errors = []
        self._lock = threading.Lock()

    def _record(self, name, kind, **key):
        with self._lock:
            self.events.append((name, kind, key))

    def cache_hit(self, kind, **key):
        self._record("cache_hit", kind, **key)

    def cache_miss(self, kind, **key):
        self._record("cache_miss", kind, **key)

    def generation_started(self, kind, prompt_chars, **key):
        self._record("generation_started", kind, **key)

    def generation_finished(self, kind, output_chars, **key):
        self._record("generation_finished", kind, **key)

    def persisted(self, kind, **key):
        self._record("persisted", kind, **key)

    def stage(self, name, **context):
        events = self

        class _Stage:
            def __enter__(self):
                return self

            def __exit__(self, exc_type, exc, tb):
                if exc is not None:
                    events.errors.append((name, exc))
                return False

        return _Stage()

    def names(self, kind=None):
        return [name for name, k, _ in self.events if kind is None or k == kind]


@pytest.fixture
def fake_llm():
    return FakeGenerator()


@pytest.fixture
def stance_store():
    return InMemoryStanceStore()


@pytest.fixture
def project_store():
    return InMemoryProjectStore()


@pytest.fixture
def events():
    return RecordingEvents()


@pytest.fixture
def project():
    return Project.from_dict({
        "id": "p1",
        "name": "City Park Renewal",
        "description": "Public consultation on the park redesign",
        "questions": [
            {
                "id": "q1",
                "text": "Should the park allow dogs off-leash?",
                "stances": [{"id": "a", "name": "Pro"}, {"id": "b", "name": "Con"}],
            },
            {
                "id": "q2",
                "text": "Should the café stay open in the evening?",
                "stances": [{"id": "yes", "name": "Open late"}, {"id": "no", "name": "Close early"}],
            },
        ],
    })


@pytest.fixture
def comments():
    return [
        Comment.from_dict({"extractedContent": "Dogs need space to run", "stances": [
            {"questionId": "q1", "stanceId": "a"},
            {"questionId": "q2", "stanceId": "yes"},
        ]}),
        Comment.from_dict({"extractedContent": "Kids get scared of loose dogs", "stances": [
            {"questionId": "q1", "stanceId": "b"},
        ]}),
        Comment.from_dict({"extractedContent": None, "stances": [
            {"questionId": "q1", "stanceId": "a"},
        ]}),
        Comment.from_dict({"extractedContent": "Evening noise bothers neighbours", "stances": [
            {"questionId": "q2", "stanceId": "no"},
        ]}),
    ]
