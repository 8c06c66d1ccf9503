from dataclasses import dataclass

# Decoding policy for every generation call. Not caller-configurable.
TEMPERATURE = 0.2
TOP_P = 0.8
TOP_K = 40
MAX_OUTPUT_TOKENS = 500
CANDIDATE_COUNT = 1


@dataclass(frozen=True)
class GenerationRequest:
    """
    Internal python representation of one retrieval-augmented generation call.
    Built by the GenerationAdapter after the gateway has authenticated and
    validated the HTTP request. Never exposed to clients.
    """

    model: str
    contents: str
    rag_corpus: str   # exactly one corpus grounds the answer
    temperature: float = TEMPERATURE
    top_p: float = TOP_P
    top_k: int = TOP_K
    max_output_tokens: int = MAX_OUTPUT_TOKENS
    candidate_count: int = CANDIDATE_COUNT
