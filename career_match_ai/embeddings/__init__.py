"""Embedding layer: Gemini, OpenAI or SentenceTransformers behind an ordered fallback list."""

from career_match_ai.embeddings.embedding_service import (
    EmbeddingProvider,
    EmbeddingService,
    career_embedding_text,
    get_embedding_service,
    user_profile_embedding_text,
)

__all__ = [
    "EmbeddingProvider",
    "EmbeddingService",
    "get_embedding_service",
    "career_embedding_text",
    "user_profile_embedding_text",
]
