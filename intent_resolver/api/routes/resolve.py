"""Resolve endpoint: one NLU message in, one answer out."""

from typing import Any

from fastapi import APIRouter, Request

from intent_resolver.api.dependencies import DispatcherDep
from intent_resolver.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/database")
@router.post("/resolve")
async def resolve_message(request: Request, dispatcher: DispatcherDep) -> dict[str, Any]:
    """Resolve the `{"message": {...}}` envelope in the request body.

    Every outcome, including failures, is a 200 carrying an answer; the
    `error` field tells the channel whether the operation failed.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.info("request_body_not_json", path=request.url.path)
        payload = None

    answer = await dispatcher.resolve(payload)
    return answer.to_payload()
