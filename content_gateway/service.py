from __future__ import annotations

import logging
import math
from typing import Optional, Union

import httpx

from .assembler import assemble_learning_path, assemble_quiz
from .classifier import classify
from .config import Settings, load_settings
from .errors import InvocationError
from .fallback import fallback_learning_path, fallback_quiz
from .ladder import EndpointKind, invoke
from .schemas import FailureResult, ImageResult, QuizResult, StepsResult
from .topics import normalize

logger = logging.getLogger(__name__)

MOCK_ENABLED_NOTE = "Using mock data (remote generation disabled)"
DEFAULT_SCORE = 0.5

# Read once at import; acquire_* calls never re-read the environment.
DEFAULT_SETTINGS = load_settings()


def clamp_score(score: Optional[float]) -> float:
    if score is None:
        return DEFAULT_SCORE
    try:
        score = float(score)
    except (TypeError, ValueError):
        return DEFAULT_SCORE
    if not math.isfinite(score):
        return DEFAULT_SCORE
    return max(0.0, min(1.0, score))


async def acquire_quiz(
    topic: str,
    difficulty_score: Optional[float] = DEFAULT_SCORE,
    *,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> QuizResult:
    """
    Fetch a quiz for `topic` from the generation service, degrading to the
    mock catalog. Never raises (except on cancellation).
    """
    settings = settings or DEFAULT_SETTINGS
    topic = topic or ""
    key = normalize(topic)

    if settings.use_mock_data:
        return fallback_quiz(key, topic=topic, note=MOCK_ENABLED_NOTE, policy=settings.catalog_match)

    params = {"current_score": clamp_score(difficulty_score)}
    try:
        raw = await invoke(EndpointKind.QUIZ, topic, params, settings=settings, client=client)
    except InvocationError as e:
        return assemble_quiz(e, topic=topic, key=key, policy=settings.catalog_match)

    return assemble_quiz(classify(raw), topic=topic, key=key, policy=settings.catalog_match)


async def acquire_learning_path(
    topic: str,
    *,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Union[StepsResult, ImageResult, FailureResult]:
    settings = settings or DEFAULT_SETTINGS
    topic = topic or ""
    key = normalize(topic)

    if not key:
        logger.warning("Learning path requested without a topic")
        return FailureResult(topic=topic, message="Missing required parameter: topic")

    if settings.use_mock_data:
        return fallback_learning_path(key, topic=topic, note=MOCK_ENABLED_NOTE, policy=settings.catalog_match)

    try:
        raw = await invoke(EndpointKind.LEARNING_PATH, topic, settings=settings, client=client)
    except InvocationError as e:
        return assemble_learning_path(e, topic=topic, key=key, policy=settings.catalog_match)

    return assemble_learning_path(classify(raw), topic=topic, key=key, policy=settings.catalog_match)
