"""
Duplicate Checker

AI-assisted duplicate detection for candidate questions. The completion
service is asked to score the candidate against existing questions; if that
is not worth it (tiny pools) or fails in any way, the lexical checker gives
the verdict instead.
"""
from typing import Dict, List, Optional, Sequence
from dupcheck.exceptions import ValidationError
from dupcheck.models.question_models import (
    Question, ExistingQuestion, SimilarityResult, DuplicateCheckResult, Recommendation
)
from dupcheck.models.similarity_analysis import SimilarityAnalysis
from dupcheck.services.completion_client import CompletionClient
from dupcheck.services.duplicate_config import DuplicateDetectionConfig
from dupcheck.services.lexical_similarity import LexicalSimilarityChecker
from dupcheck.utils.prompt_templates import PromptTemplates
from dupcheck.utils.response_parser import ResponseParser
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)


class DuplicateChecker:
    """Checks one candidate question against existing questions."""

    def __init__(
        self,
        completion_client: Optional[CompletionClient] = None,
        config: Optional[DuplicateDetectionConfig] = None,
        lexical_checker: Optional[LexicalSimilarityChecker] = None,
        response_parser: Optional[ResponseParser] = None
    ):
        """
        Initialize DuplicateChecker.

        Args:
            completion_client: Completion service; None means every check uses the lexical path
            config: Weights and thresholds
            lexical_checker: Fallback checker, built from config when omitted
            response_parser: Parser for completion text
        """
        self.completion_client = completion_client
        self.config = config or DuplicateDetectionConfig()
        self.lexical_checker = lexical_checker or LexicalSimilarityChecker(self.config)
        self.response_parser = response_parser or ResponseParser()

    def uses_ai(self, pool_size: int) -> bool:
        """Whether a pool of this size is sent to the completion service."""
        if self.completion_client is None:
            return False
        return min(pool_size, self.config.max_ai_comparisons) >= self.config.min_ai_pool_size

    async def check_duplicate(
        self,
        new_question: Question,
        existing_questions: Sequence[ExistingQuestion],
        similarity_threshold: Optional[float] = None
    ) -> DuplicateCheckResult:
        """
        Check whether a candidate duplicates any existing question.

        Args:
            new_question: Candidate question
            existing_questions: Questions to compare against
            similarity_threshold: Top similarity at which the candidate counts as a duplicate

        Returns:
            DuplicateCheckResult

        Raises:
            ValidationError: If the candidate has no stem
        """
        if new_question is None or not (new_question.stem or "").strip():
            raise ValidationError("Question stem is required")

        if similarity_threshold is None:
            similarity_threshold = self.config.default_similarity_threshold

        if not existing_questions:
            return DuplicateCheckResult(
                is_duplicate=False,
                similar_questions=[],
                confidence=1.0,
                recommendation=Recommendation.SAVE
            )

        if self.completion_client is None:
            return self.lexical_checker.check(new_question, existing_questions, similarity_threshold)

        questions_to_check = list(existing_questions[:self.config.max_ai_comparisons])

        if len(questions_to_check) < self.config.min_ai_pool_size:
            return self.lexical_checker.check(new_question, questions_to_check, similarity_threshold)

        try:
            return await self._check_with_ai(new_question, questions_to_check, similarity_threshold)
        except Exception as e:
            logger.warning(f"AI duplicate check failed, using lexical similarity: {e}")
            return self.lexical_checker.check(new_question, existing_questions, similarity_threshold)

    async def _check_with_ai(
        self,
        new_question: Question,
        questions_to_check: List[ExistingQuestion],
        similarity_threshold: float
    ) -> DuplicateCheckResult:
        messages = PromptTemplates.get_similarity_messages(new_question, questions_to_check)
        response_text = await self.completion_client.send_prompt(messages)
        analysis = self.response_parser.parse_similarity_analysis(response_text)

        similarities = self._collect_similarities(analysis, questions_to_check)
        max_similarity = similarities[0].similarity if similarities else 0.0

        logger.info(
            f"AI duplicate check found {len(similarities)} similar questions "
            f"out of {len(questions_to_check)}, max {max_similarity:.2f}"
        )
        return DuplicateCheckResult(
            is_duplicate=max_similarity >= similarity_threshold,
            similar_questions=similarities,
            confidence=self._confidence(analysis),
            recommendation=self.recommend(max_similarity, similarity_threshold)
        )

    def _collect_similarities(
        self,
        analysis: SimilarityAnalysis,
        questions_to_check: List[ExistingQuestion]
    ) -> List[SimilarityResult]:
        known: Dict[str, ExistingQuestion] = {question.id: question for question in questions_to_check}
        similarities: List[SimilarityResult] = []

        for entry in analysis.similarities:
            if entry.similarity is None or entry.similarity < self.config.min_similarity:
                continue
            existing = known.get(entry.question_id) if entry.question_id else None
            if existing is None:
                logger.debug(f"Ignoring similarity for unknown question id: {entry.question_id}")
                continue
            similarities.append(SimilarityResult(
                question_id=existing.id,
                similarity=_clamp(entry.similarity),
                reason=entry.reason or "Similar content detected",
                stem=existing.stem
            ))

        similarities.sort(key=lambda s: s.similarity, reverse=True)
        return similarities

    def _confidence(self, analysis: SimilarityAnalysis) -> float:
        assessment = analysis.overall_assessment
        if assessment is None or assessment.confidence is None:
            return self.config.default_ai_confidence
        return _clamp(assessment.confidence)

    def recommend(self, max_similarity: float, similarity_threshold: Optional[float] = None) -> Recommendation:
        """Map the top similarity to a recommendation using thresholds derived from the caller's threshold."""
        if similarity_threshold is None:
            similarity_threshold = self.config.default_similarity_threshold
        if max_similarity >= self.config.reject_threshold(similarity_threshold):
            return Recommendation.REJECT
        if max_similarity >= self.config.review_threshold(similarity_threshold):
            return Recommendation.REVIEW
        return Recommendation.SAVE


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)
