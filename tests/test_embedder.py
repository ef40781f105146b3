# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Description: test_embedder.py
# -----------------------------------------------------------------------------
import os
from types import SimpleNamespace

import pytest

from config.Config import Config
from embedding.IQEmbedder import EmbeddingProvider, IQEmbedder
from utility.errors import ProviderError

CFG = SimpleNamespace(
    openai_azure_api_key="key",
    openai_azure_endpoint="https://example.openai.azure.com",
    openai_azure_embed_deployment="embed-test",
)


class _FakeEmbeddings:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create(self, model, input):
        self.calls.append((model, input))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return SimpleNamespace(data=[SimpleNamespace(embedding=item)])


def _embedder(responses, **kwargs):
    embeddings = _FakeEmbeddings(responses)
    sleeps = []
    client = SimpleNamespace(embeddings=embeddings)
    emb = IQEmbedder(CFG, client=client, sleep=sleeps.append, **kwargs)
    return emb, embeddings, sleeps


def test_embed_normalises_and_records_dimension():
    emb, embeddings, _ = _embedder([[3.0, 4.0]])
    vec = emb.embed("What is a hash map?")

    assert vec == pytest.approx([0.6, 0.8])
    assert emb.dimension == 2
    assert embeddings.calls == [("embed-test", ["What is a hash map?"])]
    assert isinstance(emb, EmbeddingProvider)


def test_embed_retries_with_backoff_then_succeeds():
    emb, embeddings, sleeps = _embedder([RuntimeError("429"), RuntimeError("503"), [1.0, 0.0]], max_retries=3)
    assert emb.embed("text") == pytest.approx([1.0, 0.0])
    assert len(embeddings.calls) == 3
    assert sleeps == pytest.approx([0.8, 0.8 * 1.7])


def test_embed_raises_provider_error_after_last_attempt():
    emb, _, sleeps = _embedder([RuntimeError("down"), RuntimeError("down")], max_retries=2)
    with pytest.raises(ProviderError) as exc:
        emb.embed("text")
    assert exc.value.provider == "embedder"
    assert len(sleeps) == 1


def test_embed_rejects_empty_text_and_empty_vectors():
    emb, embeddings, _ = _embedder([[]])
    with pytest.raises(ProviderError):
        emb.embed("   ")
    assert embeddings.calls == []
    with pytest.raises(ProviderError):
        emb.embed("text")


def test_embed_rejects_dimension_change():
    emb, _, _ = _embedder([[1.0, 0.0], [1.0, 0.0, 0.0]])
    emb.embed("first")
    with pytest.raises(ProviderError):
        emb.embed("second")


def test_connection_reports_failure():
    emb, _, _ = _embedder([RuntimeError("down")], max_retries=1)
    assert emb.test_connection() is False


@pytest.mark.integration
def test_azure_embedding_round_trip():
    missing = Config.missing_env_vars(Config.AZURE_OPENAI_ENV_VARS)
    if missing:
        pytest.skip(f"Azure OpenAI env not configured: {missing}")

    cfg = SimpleNamespace(
        openai_azure_api_key=os.getenv("AZURE_OPENAI_API_KEY"),
        openai_azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT"),
        openai_azure_embed_deployment=os.getenv("AZURE_OPENAI_EMBED_DEPLOYMENT"),
    )
    vec = IQEmbedder(cfg).embed("Explain how a hash map handles collisions")
    assert len(vec) > 0
    assert sum(v * v for v in vec) == pytest.approx(1.0, abs=1e-3)
