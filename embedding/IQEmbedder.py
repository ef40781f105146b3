# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Description: IQEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Any, Callable, List, Optional, Protocol, runtime_checkable

import numpy as np
from openai import AzureOpenAI

from config.Config import Config
from utility.errors import ProviderError
from utility.logging_utils import get_class_logger


@runtime_checkable
class EmbeddingProvider(Protocol):
    def embed(self, text: str) -> List[float]:
        ...


class IQEmbedder(EmbeddingProvider):
    def __init__(
            self,
            cfg: Config,
            *,
            normalize: bool = True,
            max_retries: int = 3,
            client: Any = None,
            sleep: Callable[[float], None] = time.sleep,
            logger=None,
    ):
        self.cfg = cfg
        self.normalize = normalize
        self.max_retries = max(1, max_retries)
        self.sleep = sleep
        self.logger = logger or get_class_logger(self.__class__)
        self.dimension: Optional[int] = None

        # Azure OpenAI client setup
        self.client = client or AzureOpenAI(
            api_key=cfg.openai_azure_api_key,
            azure_endpoint=cfg.openai_azure_endpoint,
            api_version="2024-10-21"
        )
        self.model = cfg.openai_azure_embed_deployment or "text-embedding-3-large"
        self.logger.info("OpenAI Azure Embedder initialised (model=%s)", self.model)

    def _embed_once(self, text: str, *, max_retries: int) -> np.ndarray:
        delay = 0.8
        for attempt in range(1, max_retries + 1):
            try:
                resp = self.client.embeddings.create(model=self.model, input=[text])
                return np.asarray(resp.data[0].embedding, dtype=np.float32)

            except Exception as e:
                self.logger.warning(f"Embedding call failed (attempt {attempt}/{max_retries}): {e}")
                if attempt == max_retries:
                    raise ProviderError("embedder", str(e)) from e
                self.sleep(delay)
                delay *= 1.7  # backoff

        # Unreachable and include for type checkers
        return np.empty((0,), dtype=np.float32)

    def embed(self, text: str) -> List[float]:
        """
        Embed one text. Raises ProviderError on failure or on a vector whose
        dimension differs from the one seen on the first successful call.
        """
        if not text or not text.strip():
            raise ProviderError("embedder", "cannot embed empty text")

        vec = self._embed_once(text, max_retries=self.max_retries)
        if vec.ndim != 1 or vec.size == 0:
            raise ProviderError("embedder", f"unexpected embedding shape {vec.shape}")

        if self.dimension is None:
            self.dimension = int(vec.size)
            self.logger.info("Embedding dimension discovered: %d", self.dimension)
        elif vec.size != self.dimension:
            raise ProviderError(
                "embedder", f"dimension mismatch: expected {self.dimension}, got {vec.size}"
            )

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            vec = vec / (np.linalg.norm(vec) + 1e-12)

        return [float(x) for x in vec]

    def test_connection(self) -> bool:
        try:
            self.embed("Azure OpenAI embedding healthcheck")
            return True
        except ProviderError as e:
            self.logger.error("Embedding healthcheck failed: %s", e)
            return False
