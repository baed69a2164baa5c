"""
Result assembly: turns classified responses (or a ladder failure) into the
result types callers see, falling back to the mock catalog whenever the
remote content is unusable.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Optional, Union

from pydantic import ValidationError

from .classifier import ClassifiedContent, Image, StructuredData, Unstructured
from .errors import InvocationError, ShapeValidationError
from .fallback import fallback_learning_path, fallback_quiz
from .schemas import ImageResult, LearningPathStep, QuizQuestion, QuizResult, StepsResult

logger = logging.getLogger(__name__)

Outcome = Union[ClassifiedContent, InvocationError]

QUIZ_LIST_KEYS = ("questions", "data")
STEP_LIST_KEYS = ("steps", "learning_path", "data")
PROMPT_KEYS = ("question", "prompt", "text")
INDEX_KEYS = ("correctAnswerIndex", "correctIndex", "correct_index", "correctAnswer")
MINUTES_KEYS = ("estimatedTimeMinutes", "estimated_minutes", "estimatedMinutes")
DEFAULT_STEP_MINUTES = 60

_QUESTION_RE = re.compile(r"Question:\s*(.+?)(?=\n|$)", re.IGNORECASE)
_OPTION_RE = re.compile(r"^\s*[A-Z]\)\s*(.+?)\s*$", re.MULTILINE)
_LETTER_RE = re.compile(r"^([A-Z])(?:\)|$)", re.IGNORECASE)


# ----------------------------
# Quiz payloads
# ----------------------------

def _unwrap_list(parsed: Any, keys: tuple[str, ...], what: str) -> list[Any]:
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        for k in keys:
            if isinstance(parsed.get(k), list):
                return parsed[k]
    raise ShapeValidationError(f"Unexpected {what} payload: expected a list or one of {', '.join(keys)}")


def _split_embedded(text: str) -> tuple[str, list[str]]:
    """Split 'Question: ...\\n\\nOptions:\\nA) ...' blocks into prompt and options."""
    if "question:" not in text.lower() or "options:" not in text.lower():
        return text, []
    head, _, tail = re.split(r"(options:)", text, maxsplit=1, flags=re.IGNORECASE)
    m = _QUESTION_RE.search(head)
    options = _OPTION_RE.findall(tail)
    if not m or not options:
        return text, []
    return m.group(1).strip(), options


def _correct_index(item: dict[str, Any], options: list[str]) -> Optional[int]:
    for k in INDEX_KEYS:
        val = item.get(k)
        if isinstance(val, int) and not isinstance(val, bool):
            return val

    answer = item.get("answer")
    if isinstance(answer, int) and not isinstance(answer, bool):
        return answer
    if not isinstance(answer, str) or not answer.strip():
        return None

    answer = answer.strip()
    m = _LETTER_RE.match(answer)
    if m:
        return ord(m.group(1).upper()) - ord("A")

    lowered = [o.strip().lower() for o in options]
    if answer.lower() in lowered:
        return lowered.index(answer.lower())
    return None


def extract_quiz_questions(parsed: Any) -> list[QuizQuestion]:
    items = _unwrap_list(parsed, QUIZ_LIST_KEYS, "quiz")
    if not items:
        raise ShapeValidationError("No questions returned from API")

    questions: list[QuizQuestion] = []
    for n, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ShapeValidationError(f"Question {n} is not an object")

        text = next((item[k] for k in PROMPT_KEYS if isinstance(item.get(k), str) and item[k].strip()), None)
        if text is None:
            raise ShapeValidationError(f"Question {n} has no prompt")

        prompt, options = _split_embedded(text)
        if not options:
            raw_options = item.get("options")
            if not isinstance(raw_options, list):
                raise ShapeValidationError(f"Question {n} has no options list")
            options = [str(o).strip() for o in raw_options if o is not None]

        index = _correct_index(item, options)
        if index is None:
            raise ShapeValidationError(f"Question {n} has no usable correct answer")

        try:
            questions.append(QuizQuestion(id=n, prompt=prompt.strip(), options=options, correct_index=index))
        except ValidationError as e:
            raise ShapeValidationError(f"Question {n} is invalid: {e.errors()[0]['msg']}") from e

    return questions


# ----------------------------
# Learning path payloads
# ----------------------------

def _minutes(item: dict[str, Any], n: int) -> int:
    val = next((item[k] for k in MINUTES_KEYS if item.get(k) is not None), None)
    if val is None:
        return DEFAULT_STEP_MINUTES
    if isinstance(val, bool):
        raise ShapeValidationError(f"Step {n} has a non-numeric duration")
    try:
        minutes = float(val)
    except (TypeError, ValueError, OverflowError):
        raise ShapeValidationError(f"Step {n} has a non-numeric duration: {val!r}")
    if not math.isfinite(minutes):
        raise ShapeValidationError(f"Step {n} has a non-finite duration: {val!r}")
    minutes = int(minutes)
    if minutes < 0:
        raise ShapeValidationError(f"Step {n} has a negative duration")
    return minutes


def extract_learning_path_steps(parsed: Any) -> list[LearningPathStep]:
    items = _unwrap_list(parsed, STEP_LIST_KEYS, "learning path")
    if not items:
        raise ShapeValidationError("Empty learning path returned from API")

    steps: list[LearningPathStep] = []
    for n, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ShapeValidationError(f"Step {n} is not an object")
        resources = item.get("resources")
        steps.append(LearningPathStep(
            id=n,
            title=str(item.get("title") or f"Step {n}"),
            description=str(item.get("description") or ""),
            resources=[str(r) for r in resources if r] if isinstance(resources, list) else [],
            estimated_minutes=_minutes(item, n),
        ))
    return steps


# ----------------------------
# Assembly
# ----------------------------

def _fallback_reason(outcome: Outcome) -> str:
    if isinstance(outcome, InvocationError):
        return f"Using mock data due to API unavailability: {outcome}"
    if isinstance(outcome, Unstructured):
        return f"Using mock data due to unstructured response: {outcome.reason or 'not JSON'}"
    if isinstance(outcome, Image):
        return f"Using mock data due to unexpected image response ({outcome.media_type})"
    return "Using mock data due to unusable response"


def assemble_quiz(outcome: Outcome, *, topic: str, key: str, policy: str = "first") -> QuizResult:
    if isinstance(outcome, StructuredData):
        try:
            questions = extract_quiz_questions(outcome.parsed)
        except ShapeValidationError as e:
            reason = f"Using mock data due to invalid quiz payload: {e}"
        else:
            return QuizResult(topic=topic, questions=questions, origin="remote")
    else:
        reason = _fallback_reason(outcome)

    logger.info("Quiz fallback for %r: %s", key, reason)
    return fallback_quiz(key, topic=topic, note=reason, policy=policy)


def assemble_learning_path(
    outcome: Outcome,
    *,
    topic: str,
    key: str,
    policy: str = "first",
) -> Union[StepsResult, ImageResult]:
    if isinstance(outcome, Image):
        return ImageResult(
            topic=topic,
            media_ref=outcome.media_ref,
            media_type=outcome.media_type,
            content=outcome.content,
        )

    if isinstance(outcome, StructuredData):
        try:
            steps = extract_learning_path_steps(outcome.parsed)
        except ShapeValidationError as e:
            reason = f"Using mock data due to invalid learning path payload: {e}"
        else:
            return StepsResult(topic=topic, steps=steps, origin="remote")
    else:
        reason = _fallback_reason(outcome)

    logger.info("Learning path fallback for %r: %s", key, reason)
    return fallback_learning_path(key, topic=topic, note=reason, policy=policy)
