from __future__ import annotations

from typing import Optional

from .catalog import LEARNING_PATH_CATALOG, QUIZ_CATALOG, match_key
from .schemas import LearningPathStep, QuizQuestion, QuizResult, StepsResult

MOCK_NOTE = "Using mock data due to API unavailability"


def fallback_quiz(
    key: str,
    *,
    topic: Optional[str] = None,
    note: Optional[str] = None,
    policy: str = "first",
) -> QuizResult:
    """
    Build quiz questions for `key` from the static catalog only.
    `topic` is the display form echoed on the result; it defaults to the key.
    """
    entry = QUIZ_CATALOG[match_key(key, QUIZ_CATALOG.keys(), policy)]
    questions = [
        QuizQuestion(id=i, prompt=q.prompt, options=list(q.options), correct_index=q.correct_index)
        for i, q in enumerate(entry, start=1)
    ]
    return QuizResult(
        topic=key if topic is None else topic,
        questions=questions,
        origin="fallback",
        note=note or MOCK_NOTE,
    )


def fallback_learning_path(
    key: str,
    *,
    topic: Optional[str] = None,
    note: Optional[str] = None,
    policy: str = "first",
) -> StepsResult:
    entry = LEARNING_PATH_CATALOG[match_key(key, LEARNING_PATH_CATALOG.keys(), policy)]
    steps = [
        LearningPathStep(
            id=i,
            title=s.title,
            description=s.description,
            resources=list(s.resources),
            estimated_minutes=s.estimated_minutes,
        )
        for i, s in enumerate(entry, start=1)
    ]
    return StepsResult(
        topic=key if topic is None else topic,
        steps=steps,
        origin="fallback",
        note=note or MOCK_NOTE,
    )
