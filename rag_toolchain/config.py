"""
Configuration management for rag-toolchain.

Loads an optional config.yaml with validation and reads provider and
database credentials from the environment (a local .env is honoured).
Credentials are handed to clients and stores as explicit config objects;
nothing below the config layer reads the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigError(f"Missing required environment variable: {name}")
    return value


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str = "https://api.openai.com/v1"
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> "OpenAIConfig":
        load_dotenv()
        return cls(api_key=_require_env("OPENAI_API_KEY"))


@dataclass(frozen=True)
class AnthropicConfig:
    api_key: str
    base_url: str = "https://api.anthropic.com/v1"
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> "AnthropicConfig":
        load_dotenv()
        return cls(api_key=_require_env("ANTHROPIC_API_KEY"))


@dataclass(frozen=True)
class PostgresConfig:
    """Connection settings for a pgvector-enabled Postgres database."""
    user: str
    password: str
    host: str
    database: str
    max_connections: int = 5

    @classmethod
    def from_env(cls) -> "PostgresConfig":
        load_dotenv()
        return cls(
            user=_require_env("POSTGRES_USER"),
            password=_require_env("POSTGRES_PASSWORD"),
            host=_require_env("POSTGRES_HOST"),
            database=_require_env("POSTGRES_DATABASE"),
        )

    @property
    def connection_string(self) -> str:
        return f"postgres://{self.user}:{self.password}@{self.host}/{self.database}"


class ToolchainConfig:
    """
    Configuration manager with strict validation.

    Every section is optional; missing sections fall back to DEFAULTS.
    """

    DEFAULTS = {
        'embedding': {
            'provider': 'openai',
            'model': 'text-embedding-ada-002',
            'batch_size': 100,
        },
        'chunking': {
            'chunk_size': 512,
            'chunk_overlap': 64,
        },
        'chat': {
            'provider': 'openai',
            'model': 'gpt-4o-mini',
            'max_tokens': 1024,
            'system_prompt': (
                "You are to give straight forward answers using the "
                "supporting information you are provided"
            ),
        },
        'vector_store': {
            'backend': 'chroma',
            'path': './vectorstore/db',
            'collection': 'embeddings',
            'distance': 'cosine',
        },
        'audit_log': {
            'enabled': False,
            'file': './audit.log',
            'level': 'INFO',
        },
    }

    EMBEDDING_PROVIDERS = ('openai', 'hash')
    CHAT_PROVIDERS = ('openai', 'anthropic')
    STORE_BACKENDS = ('chroma', 'postgres')
    DISTANCES = ('l2', 'cosine', 'inner_product')

    def __init__(self, config_path: Optional[str] = None):
        """
        Load and validate configuration.

        Args:
            config_path: Path to config.yaml. Defaults to $RAG_TOOLCHAIN_CONFIG
                or ./configs/config.yaml; a missing default file means defaults.

        Raises:
            ConfigError: If an explicit config file is missing or the config is invalid
        """
        load_dotenv()

        explicit = config_path is not None
        if config_path is None:
            config_path = os.getenv("RAG_TOOLCHAIN_CONFIG", "./configs/config.yaml")

        self.config_path = Path(config_path)
        loaded: Dict[str, Any] = {}

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML: {e}")
        elif explicit:
            raise ConfigError(f"Config file not found: {self.config_path}")

        if not isinstance(loaded, dict):
            raise ConfigError("Config root must be a mapping")

        for section in self.DEFAULTS:
            if not isinstance(loaded.get(section) or {}, dict):
                raise ConfigError(f"{section} must be a mapping")

        self.data = {
            section: {**defaults, **(loaded.get(section) or {})}
            for section, defaults in self.DEFAULTS.items()
        }
        for key, value in loaded.items():
            self.data.setdefault(key, value)

        self._validate()

    def _validate(self):
        """Validate configuration values."""
        embedding_cfg = self.data['embedding']
        if embedding_cfg.get('provider') not in self.EMBEDDING_PROVIDERS:
            raise ConfigError(f"Invalid embedding provider: {embedding_cfg.get('provider')}")

        chat_cfg = self.data['chat']
        if chat_cfg.get('provider') not in self.CHAT_PROVIDERS:
            raise ConfigError(f"Invalid chat provider: {chat_cfg.get('provider')}")

        store_cfg = self.data['vector_store']
        if store_cfg.get('backend') not in self.STORE_BACKENDS:
            raise ConfigError(f"Invalid vector store backend: {store_cfg.get('backend')}")
        if store_cfg.get('distance') not in self.DISTANCES:
            raise ConfigError(f"Invalid distance function: {store_cfg.get('distance')}")

        chunking_cfg = self.data['chunking']
        for key in ('chunk_size', 'chunk_overlap'):
            if not isinstance(chunking_cfg.get(key), int):
                raise ConfigError(f"chunking.{key} must be an integer")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value by dot-notation path.

        Args:
            key: Key path (e.g., 'chunking.chunk_size', 'chat.provider')
            default: Default value if not found

        Returns:
            Configuration value
        """
        value = self.data

        for k in key.split('.'):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_embedding_config(self) -> Dict[str, Any]:
        return self.data['embedding']

    def get_chunking_config(self) -> Dict[str, Any]:
        return self.data['chunking']

    def get_chat_config(self) -> Dict[str, Any]:
        return self.data['chat']

    def get_vector_store_config(self) -> Dict[str, Any]:
        return self.data['vector_store']

    def get_audit_config(self) -> Dict[str, Any]:
        return self.data['audit_log']


# Global config instance (lazy-loaded)
_config_instance: Optional[ToolchainConfig] = None


def load_config(config_path: Optional[str] = None) -> ToolchainConfig:
    """
    Load or retrieve cached configuration.

    Args:
        config_path: Optional override path

    Returns:
        ToolchainConfig instance
    """
    global _config_instance
    if _config_instance is None or config_path is not None:
        _config_instance = ToolchainConfig(config_path)
    return _config_instance


def get_config() -> ToolchainConfig:
    """Get currently loaded config (must be initialized)."""
    if _config_instance is None:
        raise RuntimeError("Config not loaded. Call load_config() first.")
    return _config_instance
