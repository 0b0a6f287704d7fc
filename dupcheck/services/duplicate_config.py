"""
Tunable weights and thresholds for duplicate detection.
"""
from dataclasses import dataclass, replace
from typing import List, Optional
from dupcheck.config import Settings, get_settings
from dupcheck.exceptions import ConfigurationError


@dataclass(frozen=True)
class DuplicateDetectionConfig:
    """Configuration for the similarity engines and the batch orchestrator."""
    # Verdict thresholds
    default_similarity_threshold: float = 0.8
    min_similarity: float = 0.6
    reject_floor: float = 0.9
    review_margin: float = 0.1
    review_floor: float = 0.7

    # AI path
    max_ai_comparisons: int = 100
    min_ai_pool_size: int = 3
    default_ai_confidence: float = 0.5

    # Batch orchestration
    batch_candidate_limit: int = 200
    batch_delay_seconds: float = 0.5

    # Lexical fallback
    stem_base_weight: float = 0.5
    options_weight: float = 0.3
    explanation_weight: float = 0.2
    correct_answer_guard_similarity: float = 0.8
    correct_answer_guard_stem_ceiling: float = 0.7
    correct_answer_guard_factor: float = 0.5
    fallback_confidence: float = 0.7
    fallback_review_threshold: float = 0.8
    min_token_length: int = 3

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DuplicateDetectionConfig":
        settings = settings or get_settings()
        config = replace(
            cls(),
            default_similarity_threshold=settings.DUPLICATE_SIMILARITY_THRESHOLD,
            batch_delay_seconds=settings.DUPLICATE_BATCH_DELAY_SECONDS,
            max_ai_comparisons=settings.DUPLICATE_MAX_AI_COMPARISONS,
            batch_candidate_limit=settings.DUPLICATE_BATCH_CANDIDATE_LIMIT,
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigurationError listing every out-of-range value."""
        errors: List[str] = []
        for name in (
            "default_similarity_threshold", "min_similarity", "reject_floor", "review_floor",
            "default_ai_confidence", "stem_base_weight", "options_weight", "explanation_weight",
            "correct_answer_guard_similarity", "correct_answer_guard_stem_ceiling",
            "correct_answer_guard_factor", "fallback_confidence", "fallback_review_threshold",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                errors.append(f"{name} must be between 0 and 1, got {value}")
        if abs(self.stem_base_weight + self.options_weight + self.explanation_weight - 1.0) > 1e-9:
            errors.append("stem_base_weight, options_weight and explanation_weight must sum to 1")
        if self.max_ai_comparisons < 1:
            errors.append("max_ai_comparisons must be positive")
        if self.batch_candidate_limit < 1:
            errors.append("batch_candidate_limit must be positive")
        if self.batch_delay_seconds < 0:
            errors.append("batch_delay_seconds must not be negative")
        if self.min_token_length < 1:
            errors.append("min_token_length must be positive")
        if errors:
            raise ConfigurationError("Invalid duplicate detection configuration", context={"errors": errors})

    def reject_threshold(self, similarity_threshold: float) -> float:
        return max(similarity_threshold, self.reject_floor)

    def review_threshold(self, similarity_threshold: float) -> float:
        # rounded so that 0.8 - 0.1 compares equal to 0.7
        return max(round(similarity_threshold - self.review_margin, 10), self.review_floor)
