# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-08
# Updated: 2026-02-03
# Description: Config
# -----------------------------------------------------------------------------
import os
from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Optional

from dotenv import find_dotenv, load_dotenv

# .env is read once per process; real environment variables win
load_dotenv(find_dotenv(usecwd=True), override=False)

_STORAGE_FIELDS = ("storage_account", "storage_key")


@dataclass(frozen=True)
class Config:
    """
    Credentials and model names for the corpus store and the two AI providers.
    Secrets never leave this object except through the SDK clients.
    """

    # Corpus CSV in Azure Blob Storage
    storage_account: str
    storage_key: str

    # OpenAI: question canonicalisation
    openai_api_key: str
    openai_chat_model: str

    # Azure OpenAI: embeddings
    openai_azure_api_key: str
    openai_azure_endpoint: str
    openai_azure_embed_deployment: str

    openai_org: Optional[str] = None

    # False when the corpus lives in a local CSV file
    require_storage: bool = True

    # field name -> env var name (required fields only)
    ENV_VARS = {
        "storage_account": "AZURE_STORAGE_ACCOUNT",
        "storage_key": "AZURE_STORAGE_KEY",
        "openai_api_key": "OPENAI_API_KEY",
        "openai_chat_model": "OPENAI_CHAT_MODEL",
        "openai_azure_api_key": "AZURE_OPENAI_API_KEY",
        "openai_azure_endpoint": "AZURE_OPENAI_ENDPOINT",
        "openai_azure_embed_deployment": "AZURE_OPENAI_EMBED_DEPLOYMENT",
    }

    STORAGE_ENV_VARS = (ENV_VARS["storage_account"], ENV_VARS["storage_key"])
    OPENAI_DIRECT_ENV_VARS = (ENV_VARS["openai_api_key"], ENV_VARS["openai_chat_model"])
    AZURE_OPENAI_ENV_VARS = (
        ENV_VARS["openai_azure_api_key"],
        ENV_VARS["openai_azure_endpoint"],
        ENV_VARS["openai_azure_embed_deployment"],
    )

    @classmethod
    def from_env(cls, *, require_storage: bool = True) -> "Config":
        values: Dict[str, str] = {
            field_name: (os.getenv(env_name) or "").strip()
            for field_name, env_name in cls.ENV_VARS.items()
        }
        return cls(
            **values,
            openai_org=(os.getenv("OPENAI_ORG") or "").strip() or None,
            require_storage=require_storage,
        )

    @staticmethod
    def missing_env_vars(names: Iterable[str]) -> List[str]:
        """Names from `names` that are unset or blank; used to skip live tests."""
        return [name for name in names if not (os.getenv(name) or "").strip()]

    def __post_init__(self) -> None:
        required = [
            f.name for f in fields(self)
            if f.name in self.ENV_VARS and (self.require_storage or f.name not in _STORAGE_FIELDS)
        ]
        missing = [self.ENV_VARS[name] for name in required if not getattr(self, name)]
        if missing:
            raise ValueError(f"Missing required environment variables: {missing}")

    def summary(self) -> Dict[str, Optional[str]]:
        """Non-secret view for startup logging."""
        return {
            "storage_account": self.storage_account or None,
            "openai_chat_model": self.openai_chat_model,
            "openai_azure_endpoint": self.openai_azure_endpoint,
            "openai_azure_embed_deployment": self.openai_azure_embed_deployment,
        }
