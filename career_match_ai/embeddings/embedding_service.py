"""Embedding service: ordered provider fallback over Gemini, OpenAI and SentenceTransformers."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from career_match_ai.config import (
    DEFAULT_EMBEDDING_DIMENSION,
    EMBEDDING_PROVIDERS,
    GEMINI_API_KEY,
    GEMINI_EMBEDDING_MODEL,
    OPENAI_API_KEY,
    OPENAI_EMBEDDING_MODEL,
    SENTENCE_TRANSFORMERS_MODEL,
)
from career_match_ai.errors import AllEmbeddingProvidersFailed, ProviderError
from career_match_ai.schemas.career import Career
from career_match_ai.schemas.user_profile import UserProfile
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


class EmbeddingProvider(ABC):
    """Abstract embedding provider."""

    name: str = "provider"

    @property
    def default_dimension(self) -> int:
        """Size of the zero vector substituted for a failed batch item."""
        return DEFAULT_EMBEDDING_DIMENSION

    @abstractmethod
    def generate_embedding(self, text: str) -> List[float]:
        """Embed a single text. Raises ProviderError on failure."""
        ...

    def generate_batch_embeddings(self, texts: List[str]) -> List[List[float]]:
        """
        Embed multiple texts one by one. Never fails item-wise: a text that cannot be
        embedded gets an all-zero vector of default_dimension.
        """
        embeddings: List[List[float]] = []
        for text in texts:
            try:
                embeddings.append(self.generate_embedding(text))
            except ProviderError as e:
                logger.error("Error in %s batch embedding: %s", self.name, e)
                embeddings.append([0.0] * self.default_dimension)
        return embeddings


class GeminiEmbeddingProvider(EmbeddingProvider):
    """Google Gemini embeddings (text-embedding-004, 768 dims)."""

    name = "gemini"

    def __init__(self, api_key: str = GEMINI_API_KEY, model: str = GEMINI_EMBEDDING_MODEL) -> None:
        if not api_key:
            raise ProviderError("GEMINI_API_KEY or GOOGLE_AI_API_KEY environment variable is required")
        self._api_key = api_key
        self._model = model
        self._client = None

    def _get_client(self):
        if self._client is None:
            from google import genai
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    @property
    def default_dimension(self) -> int:
        return 768

    def generate_embedding(self, text: str) -> List[float]:
        try:
            result = self._get_client().models.embed_content(model=self._model, contents=text)
            values = result.embeddings[0].values if result.embeddings else None
        except Exception as e:
            raise ProviderError(f"Failed to generate embedding with Gemini: {e}") from e
        if not values:
            raise ProviderError("Gemini returned an empty embedding")
        return list(values)


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """OpenAI embeddings API (e.g. text-embedding-3-small)."""

    name = "openai"

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        model: str = OPENAI_EMBEDDING_MODEL,
    ) -> None:
        if not api_key:
            raise ProviderError("OPENAI_API_KEY environment variable is required")
        self._api_key = api_key
        self._model = model

    def _get_client(self):
        from openai import OpenAI
        return OpenAI(api_key=self._api_key)

    @property
    def default_dimension(self) -> int:
        return 1536

    def generate_embedding(self, text: str) -> List[float]:
        t = (text or "").strip() or " "
        try:
            resp = self._get_client().embeddings.create(model=self._model, input=[t])
        except Exception as e:
            raise ProviderError(f"Failed to generate embedding with OpenAI: {e}") from e
        return resp.data[0].embedding

    def generate_batch_embeddings(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []
        cleaned = [t.strip() if t else " " for t in texts]
        try:
            resp = self._get_client().embeddings.create(model=self._model, input=cleaned)
        except Exception as e:
            # One bad item fails the whole request; retry item by item
            logger.warning("OpenAI batch request failed, embedding one by one: %s", e)
            return super().generate_batch_embeddings(texts)
        by_idx = {d.index: d.embedding for d in resp.data}
        return [by_idx.get(i) or [0.0] * self.default_dimension for i in range(len(cleaned))]


class SentenceTransformersEmbeddingProvider(EmbeddingProvider):
    """Local embeddings via SentenceTransformers (e.g. all-MiniLM-L6-v2)."""

    name = "sentence_transformers"

    def __init__(self, model_name: str = SENTENCE_TRANSFORMERS_MODEL) -> None:
        self._model_name = model_name
        self._model = None

    def _get_model(self):
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer
            except ImportError as e:
                raise ProviderError(
                    "sentence-transformers not installed; pip install sentence-transformers"
                ) from e
            try:
                self._model = SentenceTransformer(self._model_name)
            except Exception as e:
                raise ProviderError(f"Could not load SentenceTransformer {self._model_name}: {e}") from e
            logger.info("Loaded SentenceTransformer model: %s", self._model_name)
        return self._model

    @property
    def default_dimension(self) -> int:
        if self._model is None:
            return 384
        return self._model.get_sentence_embedding_dimension()

    def generate_embedding(self, text: str) -> List[float]:
        model = self._get_model()
        try:
            vec = model.encode((text or "").strip() or " ", convert_to_numpy=True)
        except Exception as e:
            raise ProviderError(f"SentenceTransformer encode failed: {e}") from e
        return vec.tolist()


# Registry used by get_embedding_service; keys match EMBEDDING_PROVIDERS entries
PROVIDER_CLASSES = {
    "gemini": GeminiEmbeddingProvider,
    "openai": OpenAIEmbeddingProvider,
    "sentence_transformers": SentenceTransformersEmbeddingProvider,
}


def user_profile_embedding_text(profile: UserProfile) -> str:
    """Build a single text blob for embedding from a user profile."""
    parts = []
    if profile.title:
        parts.append(profile.title)
    if profile.bio:
        parts.append(profile.bio)
    parts.append("Experience level: " + (profile.experience or "Unknown"))
    if profile.skills:
        parts.append("Skills: " + ", ".join(f"{s.name} ({s.level})" for s in profile.skills))
    if profile.interests:
        parts.append("Interests: " + ", ".join(profile.interests))
    return ". ".join(parts)


def career_embedding_text(career: Career) -> str:
    """Build a single text for embedding from a career record."""
    parts = [career.title, career.description, career.industry or ""]
    if career.skills:
        parts.append("Required skills: " + ", ".join(f"{s.name} ({s.level})" for s in career.skills))
    return ". ".join(p for p in parts if p)


class EmbeddingService:
    """
    Tries each provider in order; the first that succeeds wins.
    Single-text calls propagate failure as AllEmbeddingProvidersFailed; batch calls
    are lenient per item (see EmbeddingProvider.generate_batch_embeddings).
    """

    def __init__(self, providers: Sequence[EmbeddingProvider]) -> None:
        self._providers = list(providers)
        if not self._providers:
            logger.warning(
                "No embedding providers available. Configure GEMINI_API_KEY or OPENAI_API_KEY."
            )

    @property
    def providers(self) -> List[EmbeddingProvider]:
        return list(self._providers)

    @property
    def default_dimension(self) -> int:
        if self._providers:
            return self._providers[0].default_dimension
        return DEFAULT_EMBEDDING_DIMENSION

    def generate_embedding(self, text: str) -> List[float]:
        for provider in self._providers:
            try:
                return provider.generate_embedding(text)
            except ProviderError as e:
                logger.warning("Embedding provider %s failed, trying next: %s", provider.name, e)
        raise AllEmbeddingProvidersFailed("All embedding providers failed")

    def generate_batch_embeddings(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []
        for provider in self._providers:
            try:
                return provider.generate_batch_embeddings(texts)
            except ProviderError as e:
                logger.warning("Batch embedding provider %s failed, trying next: %s", provider.name, e)
        raise AllEmbeddingProvidersFailed("All embedding providers failed for batch processing")

    def generate_user_profile_embedding(self, profile: UserProfile) -> List[float]:
        return self.generate_embedding(user_profile_embedding_text(profile))

    def generate_career_embedding(self, career: Career) -> List[float]:
        return self.generate_embedding(career_embedding_text(career))


def get_embedding_service(provider_names: Optional[List[str]] = None) -> EmbeddingService:
    """
    Return an EmbeddingService over the configured providers (dependency injection).
    provider_names: override config order; None uses EMBEDDING_PROVIDERS.
    Providers that cannot be constructed (e.g. missing API key) are skipped.
    """
    names = provider_names if provider_names is not None else EMBEDDING_PROVIDERS
    providers: List[EmbeddingProvider] = []
    for raw_name in names:
        name = raw_name.strip().lower()
        cls = PROVIDER_CLASSES.get(name)
        if cls is None:
            logger.warning("Unknown embedding provider '%s'; skipping", raw_name)
            continue
        try:
            providers.append(cls())
            logger.info("Embedding provider initialized: %s", name)
        except ProviderError as e:
            logger.warning("Failed to initialize embedding provider %s: %s", name, e)
    return EmbeddingService(providers)
