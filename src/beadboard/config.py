"""Configuration management for the beadboard engine."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tunables for graph analytics and metrics recomputation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    pagerank_damping: float = 0.85
    pagerank_max_iterations: int = 100
    pagerank_tolerance: float = 1e-6

    # Quiet period before a structural change triggers recomputation.
    recompute_debounce_ms: int = 300


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
