"""Configuration schema models using Pydantic.

Every field has a default, and the defaults reproduce the production matching
policy: threshold 0.5, confidence floor 0.4, top 10 results, 60/25/15 blend.
"""

import math
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SimilarityWeights(BaseModel):
    """Points awarded by each pass of the similarity scorer."""

    exact: float = Field(1.0, ge=0, description="Per keyword with an identical counterpart")
    synonym: float = Field(0.8, ge=0, description="Per keyword with a synonymous counterpart")
    partial: float = Field(0.6, ge=0, description="Per keyword contained in a counterpart")
    context_bonus: float = Field(
        0.5, ge=0, description="Flat bonus when both texts share a non-general context"
    )
    partial_min_length: int = Field(
        3, ge=0, description="Keywords must be longer than this to count as partial matches"
    )


class ConfidenceWeights(BaseModel):
    """Blend of similarity and reputation signals into a confidence value."""

    similarity: float = Field(0.6, ge=0, le=1)
    trust: float = Field(0.25, ge=0, le=1)
    experience: float = Field(0.15, ge=0, le=1)
    trust_scale: float = Field(100, gt=0, description="Trust score that maps to a factor of 1")
    xp_cap: int = Field(1000, gt=0, description="Experience points that saturate the factor")
    chain_factor: float = Field(
        0.85, ge=0, le=1, description="Discount applied to chain matches"
    )

    @model_validator(mode="after")
    def validate_blend(self):
        """Validate that the three blend weights sum to 1."""
        total = self.similarity + self.trust + self.experience
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(
                f"Confidence weights must sum to 1.0 (similarity + trust + experience), got {total:.4f}"
            )
        return self


class ChainSearchConfig(BaseModel):
    """Multi-party cycle search settings."""

    enabled: bool = Field(False, description="Search for chains of three or more users")
    max_length: int = Field(
        4, ge=3, le=6, description="Longest chain explored, counting the requesting user"
    )


class MatchingConfig(BaseModel):
    """Matching policy."""

    similarity_threshold: float = Field(
        0.5, ge=0, le=1, description="Minimum similarity for a posting to satisfy another"
    )
    min_confidence: float = Field(
        0.4, ge=0, le=1, description="Candidates below this confidence are dropped"
    )
    max_results: int = Field(10, ge=1, description="Maximum candidates returned per list")
    similarity: SimilarityWeights = Field(default_factory=SimilarityWeights)
    confidence: ConfidenceWeights = Field(default_factory=ConfidenceWeights)
    chain: ChainSearchConfig = Field(default_factory=ChainSearchConfig)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for the swap match engine."""

    matching: MatchingConfig = Field(
        default_factory=MatchingConfig, description="Matching policy"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
