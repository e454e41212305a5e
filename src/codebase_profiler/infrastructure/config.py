"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from codebase_profiler.domain import weights as w
from codebase_profiler.domain.weights import HeuristicWeights


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    max_workers: int = 4
    parallel_threshold: int = 64
    max_files: int = 5_000

    # Detector trust weights
    shebang_weight: float = w.SHEBANG_WEIGHT
    extension_weight: float = w.EXTENSION_WEIGHT
    syntax_weight: float = w.SYNTAX_WEIGHT
    pattern_weight: float = w.PATTERN_WEIGHT
    keyword_weight: float = w.KEYWORD_WEIGHT

    # Language aggregation split
    aggregation_confidence_weight: float = w.AGGREGATION_CONFIDENCE_WEIGHT
    aggregation_file_share_weight: float = w.AGGREGATION_FILE_SHARE_WEIGHT
    aggregation_byte_share_weight: float = w.AGGREGATION_BYTE_SHARE_WEIGHT

    # Quality score split
    quality_maintainability_weight: float = w.QUALITY_MAINTAINABILITY_WEIGHT
    quality_compliance_weight: float = w.QUALITY_COMPLIANCE_WEIGHT
    quality_documentation_weight: float = w.QUALITY_DOCUMENTATION_WEIGHT
    quality_duplication_weight: float = w.QUALITY_DUPLICATION_WEIGHT

    def heuristic_weights(self) -> HeuristicWeights:
        return HeuristicWeights(
            shebang=self.shebang_weight,
            extension=self.extension_weight,
            syntax=self.syntax_weight,
            pattern=self.pattern_weight,
            keyword=self.keyword_weight,
            aggregation_confidence=self.aggregation_confidence_weight,
            aggregation_file_share=self.aggregation_file_share_weight,
            aggregation_byte_share=self.aggregation_byte_share_weight,
            quality_maintainability=self.quality_maintainability_weight,
            quality_compliance=self.quality_compliance_weight,
            quality_documentation=self.quality_documentation_weight,
            quality_duplication=self.quality_duplication_weight,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
