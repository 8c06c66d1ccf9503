# src/generation/vertex_client.py

from typing import Optional, Protocol

from google import genai
from google.genai import types

from common.schemas.generation_request import GenerationRequest
from common.logging_utils import log_event


class GenerativeBackend(Protocol):
    """Anything that turns a GenerationRequest into text (or raises)."""

    def generate(self, request: GenerationRequest) -> Optional[str]:
        ...


def build_generate_config(request: GenerationRequest) -> types.GenerateContentConfig:
    """
    Translate our GenerationRequest into the SDK config: fixed sampling
    parameters plus a single Vertex RAG store retrieval tool.
    """
    return types.GenerateContentConfig(
        temperature=request.temperature,
        top_p=request.top_p,
        top_k=request.top_k,
        max_output_tokens=request.max_output_tokens,
        candidate_count=request.candidate_count,
        tools=[
            types.Tool(
                retrieval=types.Retrieval(
                    vertex_rag_store=types.VertexRagStore(
                        rag_resources=[
                            types.VertexRagStoreRagResource(rag_corpus=request.rag_corpus),
                        ],
                    ),
                ),
            ),
        ],
    )


class VertexGenAIBackend:
    """
    Vertex AI client built on the google-genai SDK.
    A fresh client is created per call, so nothing is shared across requests.
    Credentials come from Application Default Credentials.
    """

    def __init__(self, project: str, location: str):
        self.project = project
        self.location = location

    def _new_client(self) -> genai.Client:
        return genai.Client(vertexai=True, project=self.project, location=self.location)

    def generate(self, request: GenerationRequest) -> Optional[str]:
        log_event(
            "vertex_client_generate_content",
            extra={"model": request.model, "location": self.location},
        )

        client = self._new_client()
        response = client.models.generate_content(
            model=request.model,
            contents=request.contents,
            config=build_generate_config(request),
        )

        return response.text
