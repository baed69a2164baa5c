# content_gateway/main.py
from __future__ import annotations

import logging
import os
from typing import AsyncIterator, Union

import httpx
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from . import __version__
from .config import Settings
from .schemas import FailureResult, ImageResult, LearningPathIn, QuizIn, QuizResult, StepsResult
from .service import DEFAULT_SETTINGS, acquire_learning_path, acquire_quiz

app = FastAPI(title="Content Gateway", version=__version__)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("content-gateway")


# -------------------------
# Config / Dependencies
# -------------------------

settings = DEFAULT_SETTINGS

allow_credentials = True
if list(settings.cors_origins) == ["*"]:
    # Browsers reject "*" with credentials
    allow_credentials = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_settings() -> Settings:
    return settings


async def get_http_client(cfg: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=cfg.timeout, follow_redirects=True) as client:
        yield client


def _require_topic(topic: str) -> str:
    if not (topic or "").strip():
        logger.error("Missing required parameter: topic")
        raise HTTPException(status_code=400, detail="Missing required parameter: topic")
    return topic


def _learning_path_response(result: Union[StepsResult, ImageResult, FailureResult]):
    if isinstance(result, ImageResult):
        logger.info("Returning image learning path for %r (%s)", result.topic, result.media_type)
        return Response(
            content=result.content,
            media_type=result.media_type,
            headers={"Content-Disposition": "inline"},
        )
    return result


# -------------------------
# Health + Root
# -------------------------

@app.get("/health", operation_id="health_check", tags=["Health"])
async def health_check():
    return {"status": "healthy", "service": "content-gateway"}


@app.get("/", operation_id="root", tags=["Root"])
async def root():
    return {
        "service": "Content Gateway",
        "version": __version__,
        "endpoints": ["/api/quiz", "/api/learning-path", "/health"],
        "docs": "/docs",
    }


# -------------------------
# Content Routes
# -------------------------

@app.post("/api/quiz", operation_id="quiz_generate", tags=["Quiz"], response_model=QuizResult)
async def quiz_generate(
    payload: QuizIn,
    cfg: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    topic = _require_topic(payload.topic)
    return await acquire_quiz(topic, payload.current_score, settings=cfg, client=client)


@app.post("/api/learning-path", operation_id="learning_path_generate", tags=["Learning Path"])
async def learning_path_generate(
    payload: LearningPathIn,
    cfg: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    topic = _require_topic(payload.topic)
    result = await acquire_learning_path(topic, settings=cfg, client=client)
    return _learning_path_response(result)


@app.get("/api/learning-path", operation_id="learning_path_get", tags=["Learning Path"])
async def learning_path_get(
    topic: str = "",
    cfg: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    topic = _require_topic(topic)
    result = await acquire_learning_path(topic, settings=cfg, client=client)
    return _learning_path_response(result)


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
