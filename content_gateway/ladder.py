from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

import httpx

from .config import Settings
from .errors import ContentAcquisitionError, InvocationError, RemoteStatusError, TransportError

logger = logging.getLogger(__name__)


class EndpointKind(str, Enum):
    QUIZ = "quiz"
    LEARNING_PATH = "learning-path"


@dataclass(frozen=True)
class Strategy:
    encoding: str  # "body" (JSON) or "query" (query string)
    method: str

    def describe(self) -> str:
        return f"{self.method} {self.encoding}"


# -------------------------
# Ladders
# -------------------------

ENDPOINT_PATHS: Mapping[EndpointKind, str] = {
    EndpointKind.QUIZ: "/quiz",
    EndpointKind.LEARNING_PATH: "/learning-path",
}

# Order only affects latency: the shape that usually works goes first.
LADDERS: Mapping[EndpointKind, tuple[Strategy, ...]] = {
    EndpointKind.QUIZ: (
        Strategy(encoding="body", method="POST"),
        Strategy(encoding="query", method="GET"),
    ),
    EndpointKind.LEARNING_PATH: (
        Strategy(encoding="body", method="POST"),
        Strategy(encoding="query", method="GET"),
    ),
}


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    media_type: Optional[str]
    body: bytes
    url: str
    strategy: Strategy


def _request_kwargs(strategy: Strategy, url: str, params: dict[str, Any]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"method": strategy.method, "url": url}
    if strategy.encoding == "body":
        kwargs["json"] = params
    elif strategy.encoding == "query":
        kwargs["params"] = {k: str(v) for k, v in params.items()}
    else:
        raise ValueError(f"Unknown request encoding: {strategy.encoding}")
    return kwargs


async def _attempt(client: httpx.AsyncClient, strategy: Strategy, url: str, params: dict[str, Any]) -> RawResponse:
    try:
        resp = await client.request(**_request_kwargs(strategy, url, params))
    except httpx.TimeoutException as e:
        raise TransportError(f"{strategy.describe()} {url} timed out: {type(e).__name__}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(f"{strategy.describe()} {url} failed: {type(e).__name__}: {e}") from e

    if not resp.is_success:
        message = f"{strategy.describe()} {url} responded with status {resp.status_code}"
        if resp.content:
            message = f"{message}: {resp.text[:100]}"
        raise RemoteStatusError(resp.status_code, message)

    return RawResponse(
        status_code=resp.status_code,
        media_type=resp.headers.get("content-type"),
        body=resp.content,
        url=str(resp.request.url),
        strategy=strategy,
    )


async def _run_ladder(
    client: httpx.AsyncClient,
    kind: EndpointKind,
    url: str,
    params: dict[str, Any],
) -> RawResponse:
    failures: list[ContentAcquisitionError] = []

    for strategy in LADDERS[kind]:
        try:
            raw = await _attempt(client, strategy, url, params)
        except (TransportError, RemoteStatusError) as e:
            logger.warning("%s strategy %s failed: %s", kind.value, strategy.describe(), e)
            failures.append(e)
            continue

        logger.info("%s strategy %s succeeded (%s)", kind.value, strategy.describe(), raw.status_code)
        return raw

    last = str(failures[-1]) if failures else f"No strategies configured for {kind.value}"
    logger.error("All %d %s strategies failed; last error: %s", len(failures), kind.value, last)
    raise InvocationError(last, failures)


async def invoke(
    kind: EndpointKind,
    topic: str,
    params: Optional[dict[str, Any]] = None,
    *,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> RawResponse:
    """
    Try each request shape configured for `kind` until one gets a 2xx.

    Returns the first successful response unvalidated; raises
    InvocationError when the ladder is exhausted. Cancellation is not
    intercepted, so a cancelled caller stops the ladder mid-attempt.
    """
    url = settings.endpoint_url(ENDPOINT_PATHS[kind])
    payload: dict[str, Any] = {"topic": topic, **(params or {})}

    if client is not None:
        return await _run_ladder(client, kind, url, payload)

    async with httpx.AsyncClient(timeout=settings.timeout, follow_redirects=True) as own_client:
        return await _run_ladder(own_client, kind, url, payload)
