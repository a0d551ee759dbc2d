"""Diff API endpoints"""

from __future__ import annotations

import json

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from models.diff import DiffRequest, DiffResult, UnifiedDiffResult
from services.line_differ import LineDiffer

router = APIRouter()
differ = LineDiffer()


@router.post("", response_model=DiffResult, response_model_exclude_none=True)
async def compare_texts(request: DiffRequest) -> DiffResult:
    """Positional line-by-line comparison"""
    return differ.compare(request.text_a, request.text_b)


@router.post("/unified", response_model=UnifiedDiffResult)
async def unified_patch(request: DiffRequest) -> UnifiedDiffResult:
    """Unified patch between the two texts"""
    return UnifiedDiffResult(
        unified_diff=differ.unified_diff(
            request.text_a, request.text_b, request.name_a, request.name_b
        )
    )


async def diff_events(text_a: str, text_b: str):
    """Yield one SSE event per difference, then a summary"""
    try:
        lines = differ.diff_lines(text_a, text_b)
        for line in lines:
            payload = line.model_dump(mode="json", exclude_none=True)
            yield {"event": "message", "data": json.dumps({"type": "line", "line": payload})}

        summary = differ.summarize(lines)
        yield {
            "event": "done",
            "data": json.dumps({"type": "done", "summary": summary.model_dump()}),
        }

    except Exception as e:
        yield {"event": "error", "data": json.dumps({"type": "error", "error": str(e)})}


@router.post("/stream")
async def stream_diff(request: DiffRequest):
    """Stream differences as Server-Sent Events"""
    return EventSourceResponse(diff_events(request.text_a, request.text_b))
