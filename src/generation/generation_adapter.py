# src/generation/generation_adapter.py

from __future__ import annotations

import time
from typing import Any, Dict, Optional

from common.config import Config
from common.logging_utils import log_event
from common.schemas.generation_request import GenerationRequest
from generation.vertex_client import GenerativeBackend, VertexGenAIBackend


class GenerationError(Exception):
    """Generation failed; str(error) is safe to return to the caller."""


class GenerationAdapter:
    """
    Gateway-side helper that:
    - Builds a GenerationRequest from the query text and the process config.
    - Calls the generative backend synchronously (no retry).
    - Returns the answer text, or raises GenerationError.

    `parameters` is part of the wire contract but has no effect on
    generation; the decoding policy in GenerationRequest is fixed.
    """

    def __init__(self, config: Config, backend: Optional[GenerativeBackend] = None):
        self.config = config
        self.backend = backend or VertexGenAIBackend(
            project=config.PROJECT,
            location=config.REGION,
        )

    def build_request(self, contents: str) -> GenerationRequest:
        return GenerationRequest(
            model=self.config.MODEL_NAME,
            contents=contents,
            rag_corpus=self.config.RAG_CORPUS,
        )

    def generate(
        self,
        contents: str,
        parameters: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> str:
        request = self.build_request(contents)
        start_time = time.monotonic()

        log_event(
            "generation_started",
            request_id=request_id,
            extra={
                "model": request.model,
                "parameter_keys": str(len(parameters or {})),
            },
        )

        try:
            text = self.backend.generate(request)
        except Exception as e:
            log_event(
                "generation_backend_error",
                request_id=request_id,
                error=f"{type(e).__name__}: {e}",
                level="error",
            )
            raise GenerationError(str(e) or type(e).__name__) from e

        # An empty answer is a failure, not a valid empty response.
        if not text:
            log_event(
                "generation_empty_result",
                request_id=request_id,
                level="error",
            )
            raise GenerationError("backend returned no text")

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        log_event(
            "generation_completed",
            request_id=request_id,
            extra={"latency_ms": str(elapsed_ms), "chars": str(len(text))},
        )

        return text
