"""
Inputs handed to the report services by the caller.

Projects, questions and comments live outside this app; these are the
read-only shapes the services work with. ``from_dict`` accepts the
camelCase documents the upstream API sends as well as snake_case keys.
"""

from dataclasses import dataclass, field
from typing import Optional


def _pick(data, *keys, default=None):
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _require(data, *keys):
    """Like _pick, but a missing or null value is an error."""
    value = _pick(data, *keys)
    if value is None:
        raise KeyError(f"missing required field {' / '.join(keys)!r} in {data!r}")
    return value


@dataclass(frozen=True)
class Stance:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data):
        return cls(id=str(_require(data, "id")), name=data["name"])


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    stances: tuple = ()

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(_require(data, "id")),
            text=data["text"],
            stances=tuple(Stance.from_dict(s) for s in data.get("stances") or ()),
        )


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    description: str = ""
    questions: tuple = ()

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(_require(data, "id", "_id")),
            name=data["name"],
            description=data.get("description") or "",
            questions=tuple(Question.from_dict(q) for q in data.get("questions") or ()),
        )


@dataclass(frozen=True)
class StanceAssignment:
    question_id: str
    stance_id: str

    @classmethod
    def from_dict(cls, data):
        return cls(
            question_id=str(_require(data, "questionId", "question_id")),
            stance_id=str(_require(data, "stanceId", "stance_id")),
        )


@dataclass(frozen=True)
class Comment:
    extracted_content: Optional[str]
    stances: tuple = field(default=())

    @classmethod
    def from_dict(cls, data):
        return cls(
            extracted_content=_pick(data, "extractedContent", "extracted_content"),
            stances=tuple(StanceAssignment.from_dict(s) for s in data.get("stances") or ()),
        )

    def stance_for(self, question_id):
        """Return this comment's assignment for ``question_id``, or None."""
        for assignment in self.stances:
            if assignment.question_id == question_id:
                return assignment
        return None
