"""
Lexical Similarity Checker

Deterministic fallback used when the completion service is skipped or fails.
Scores candidates with weighted Jaccard token overlap over stem, options and
explanation.
"""
import re
from typing import List, Optional, Sequence, Set
from dupcheck.models.question_models import (
    Question, ExistingQuestion, SimilarityResult, DuplicateCheckResult, Recommendation
)
from dupcheck.services.duplicate_config import DuplicateDetectionConfig
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Lowercase, turn punctuation into spaces and collapse whitespace."""
    if not text:
        return ""
    text = _PUNCTUATION.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str, min_length: int = 3) -> Set[str]:
    """Split normalized text into a set of tokens of at least min_length characters."""
    return {word for word in text.split(" ") if len(word) >= min_length}


def jaccard_similarity(text1: str, text2: str, min_length: int = 3) -> float:
    """Jaccard similarity of the token sets of two normalized texts."""
    words1 = tokenize(text1, min_length)
    words2 = tokenize(text2, min_length)
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


class LexicalSimilarityChecker:
    """Pure, deterministic duplicate checker based on token overlap."""

    def __init__(self, config: Optional[DuplicateDetectionConfig] = None):
        self.config = config or DuplicateDetectionConfig()

    def check(
        self,
        new_question: Question,
        existing_questions: Sequence[ExistingQuestion],
        similarity_threshold: Optional[float] = None
    ) -> DuplicateCheckResult:
        """
        Compare a candidate against existing questions.

        Args:
            new_question: Candidate question
            existing_questions: Questions to compare against
            similarity_threshold: Top similarity at which the candidate counts as a duplicate

        Returns:
            DuplicateCheckResult with a fixed, lower confidence. Never recommends reject.
        """
        if similarity_threshold is None:
            similarity_threshold = self.config.default_similarity_threshold

        similarities: List[SimilarityResult] = []
        for existing in existing_questions:
            result = self.score(new_question, existing)
            if result is not None:
                similarities.append(result)

        similarities.sort(key=lambda s: s.similarity, reverse=True)
        max_similarity = similarities[0].similarity if similarities else 0.0

        if max_similarity >= self.config.fallback_review_threshold:
            recommendation = Recommendation.REVIEW
        else:
            recommendation = Recommendation.SAVE

        logger.debug(
            f"Lexical check compared {len(existing_questions)} questions, "
            f"{len(similarities)} similar, max {max_similarity:.2f}"
        )
        return DuplicateCheckResult(
            is_duplicate=max_similarity >= similarity_threshold,
            similar_questions=similarities,
            confidence=self.config.fallback_confidence,
            recommendation=recommendation
        )

    def score(self, new_question: Question, existing: ExistingQuestion) -> Optional[SimilarityResult]:
        """Score one pair; returns None when the combined similarity is below the minimum."""
        min_length = self.config.min_token_length

        stem_similarity = jaccard_similarity(
            normalize_text(new_question.stem), normalize_text(existing.stem), min_length
        )

        options_similarity = 0.0
        options_weight = 0.0
        if new_question.has_options and existing.has_options:
            options_similarity = jaccard_similarity(
                self._options_text(new_question), self._options_text(existing), min_length
            )
            options_weight = self.config.options_weight
            if self._shares_correct_answer(new_question, existing) and \
                    stem_similarity < self.config.correct_answer_guard_stem_ceiling:
                # A shared answer such as "True" says little when the stems differ
                options_similarity *= self.config.correct_answer_guard_factor

        explanation_similarity = 0.0
        explanation_weight = 0.0
        if new_question.has_explanation and existing.has_explanation:
            explanation_similarity = jaccard_similarity(
                normalize_text(new_question.explanation), normalize_text(existing.explanation), min_length
            )
            explanation_weight = self.config.explanation_weight

        stem_weight = self.config.stem_base_weight
        if options_weight + explanation_weight == 0:
            stem_weight = 1.0

        total = (
            stem_similarity * stem_weight
            + options_similarity * options_weight
            + explanation_similarity * explanation_weight
        )
        total = min(total, 1.0)
        if total < self.config.min_similarity:
            return None

        reason = f"Stem similarity: {_percent(stem_similarity)}%"
        if options_weight > 0:
            reason += f", Options similarity: {_percent(options_similarity)}%"
        if explanation_weight > 0:
            reason += f", Explanation similarity: {_percent(explanation_similarity)}%"
        reason += f" (Combined: {_percent(total)}%)"

        return SimilarityResult(
            question_id=existing.id,
            similarity=total,
            reason=reason,
            stem=existing.stem
        )

    @staticmethod
    def _options_text(question: Question) -> str:
        return " ".join(normalize_text(option.text) for option in question.options or [])

    def _shares_correct_answer(self, new_question: Question, existing: Question) -> bool:
        new_correct = [normalize_text(o.text) for o in new_question.correct_options]
        existing_correct = [normalize_text(o.text) for o in existing.correct_options]
        if not new_correct or not existing_correct:
            return False
        answer_similarity = jaccard_similarity(
            " ".join(new_correct), " ".join(existing_correct), self.config.min_token_length
        )
        return answer_similarity > self.config.correct_answer_guard_similarity


def _percent(value: float) -> int:
    # halves round up
    return int(value * 100 + 0.5)
