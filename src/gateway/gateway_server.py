# src/gateway/gateway_server.py

import uuid
import time
import asyncio
import functools
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError

from gateway.request_models import QueryHTTPRequest
from generation.generation_adapter import GenerationAdapter, GenerationError
from common.signature import SIGNATURE_HEADER, verify
from common.logging_utils import log_event
from common.config import Config, config


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": f"Content-Type, {SIGNATURE_HEADER}",
}

MSG_READ_FAILED = "Failed to read request body"
MSG_INVALID_SIGNATURE = "Invalid signature"
MSG_INVALID_JSON = "Invalid JSON"
MSG_MISSING_CONTENTS = "Missing 'contents' parameter"
MSG_INTERNAL_ERROR = "Internal Server Error"

# Every path and method lands in `handle`. Only OPTIONS is special-cased;
# everything else goes through authentication.
ROUTED_PATH = "/{path:path}"
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _error(status_code: int, message: str) -> Response:
    return PlainTextResponse(message, status_code=status_code, headers=CORS_HEADERS)


def create_app(cfg: Config, adapter: Optional[GenerationAdapter] = None) -> FastAPI:
    """
    Build the gateway app around an explicit config and generation adapter.
    Tests pass an adapter with a stub backend; deployment uses `app` below.
    """
    adapter = adapter or GenerationAdapter(cfg)
    # No docs routes: they would shadow the catch-all route without CORS headers.
    app = FastAPI(title="Signed RAG Gateway", docs_url=None, redoc_url=None, openapi_url=None)

    missing = cfg.missing_fields()
    if missing:
        log_event(
            "gateway_config_incomplete",
            extra={"missing": ",".join(missing)},
            level="warning",
        )

    async def handle(request: Request) -> Response:
        # CORS headers are attached to every response built below, including
        # preflight and errors.
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        request_id = str(uuid.uuid4())

        try:
            return await _process(request, request_id)
        except Exception as e:
            log_event(
                "gateway_unhandled_error",
                request_id=request_id,
                error=type(e).__name__,
                level="error",
            )
            return _error(500, MSG_INTERNAL_ERROR)

    async def _process(request: Request, request_id: str) -> Response:
        # Mark start of end-to-end timing at the HTTP boundary
        start_time = time.monotonic()

        try:
            body = await request.body()
        except Exception as e:
            log_event(
                "gateway_body_read_failed",
                request_id=request_id,
                error=type(e).__name__,
                level="error",
            )
            return _error(500, MSG_READ_FAILED)

        log_event(
            "gateway_received_request",
            request_id=request_id,
            extra={"method": request.method, "bytes": str(len(body))},
        )

        # Authenticate the raw bytes before any JSON parsing happens
        if not verify(body, request.headers.get(SIGNATURE_HEADER), cfg.VERTEX_CF_AUTH_TOKEN):
            log_event(
                "gateway_rejected_request",
                request_id=request_id,
                extra={"status": "403", "reason": "signature"},
                level="warning",
            )
            return _error(403, MSG_INVALID_SIGNATURE)

        try:
            query = QueryHTTPRequest.model_validate_json(body)
        except ValidationError as e:
            log_event(
                "gateway_rejected_request",
                request_id=request_id,
                extra={"status": "400", "reason": "json", "errors": str(e.error_count())},
                level="warning",
            )
            return _error(400, MSG_INVALID_JSON)

        if query.contents == "":
            log_event(
                "gateway_rejected_request",
                request_id=request_id,
                extra={"status": "400", "reason": "empty_contents"},
                level="warning",
            )
            return _error(400, MSG_MISSING_CONTENTS)

        # Blocking backend call → run in executor
        loop = asyncio.get_running_loop()
        try:
            text = await loop.run_in_executor(
                None,
                functools.partial(
                    adapter.generate,
                    query.contents,
                    query.parameters,
                    request_id=request_id,
                ),
            )
        except GenerationError as e:
            return _error(500, str(e))

        elapsed_ms = int((time.monotonic() - start_time) * 1000)

        log_event(
            "gateway_end_to_end_metrics",
            request_id=request_id,
            extra={"status": "200", "total_ms": str(elapsed_ms)},
        )

        return JSONResponse({"response": text}, status_code=200, headers=CORS_HEADERS)

    app.add_api_route(ROUTED_PATH, handle, methods=ROUTED_METHODS)
    app.state.adapter = adapter

    return app


app = create_app(config)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.GATEWAY_HOST, port=config.GATEWAY_PORT)
