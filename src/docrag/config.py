"""Configuration management for DocRAG."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    api_key: str = ""  # shared bearer secret, empty disables the gate

    # Logging
    log_level: str = "INFO"
    log_level_http: str = "WARNING"  # httpx / httpcore

    # Embeddings
    embedding_provider: Literal["sentence-transformers", "http"] = "sentence-transformers"
    embedding_model: str = "all-mpnet-base-v2"
    embedding_api_key: str = ""  # only used by the http provider
    embedding_base_url: str = "https://api.openai.com/v1"
    embedding_batch_size: int = 64  # provider batch-size limit
    embedding_timeout: float = 60.0  # seconds

    # Crawling
    sitemap_path: str = "sitemap-pages.xml"
    sitemap_timeout: float = 20.0  # seconds
    render_timeout: float = 60.0  # seconds
    extraction_policy: Literal["aggressive", "minimal"] = "aggressive"

    # Chunking
    chunk_size: int = 1000  # characters
    chunk_overlap: int = 150  # characters

    # Search
    search_text_limit: int = 900  # characters returned per hit
    default_top_k: int = 5

    # Ingestion
    ingest_continue_on_error: bool = False  # record failed pages and keep going


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
