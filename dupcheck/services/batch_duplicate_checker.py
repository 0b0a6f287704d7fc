"""
Batch Duplicate Checker

Checks a whole import batch against one shared snapshot of existing
questions, sequentially, pacing completion calls to stay under the
completion service's rate limits.
"""
from typing import List, Optional, Sequence, Union
from dupcheck.models.question_models import (
    Question, ExistingQuestion, BatchDuplicateCheckResult, BatchCheckSummary,
    CandidateFilter, DuplicateCheckResult, Recommendation
)
from dupcheck.services.duplicate_checker import DuplicateChecker
from dupcheck.services.duplicate_config import DuplicateDetectionConfig
from dupcheck.services.question_store import QuestionStore
from dupcheck.utils.pacing import FixedIntervalPacer, NoopPacer
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)


class BatchDuplicateChecker:
    """Orchestrates duplicate checks for a batch of candidate questions."""

    def __init__(
        self,
        store: QuestionStore,
        checker: Optional[DuplicateChecker] = None,
        config: Optional[DuplicateDetectionConfig] = None,
        pacer: Optional[Union[FixedIntervalPacer, NoopPacer]] = None
    ):
        self.store = store
        self.config = config or getattr(checker, "config", None) or DuplicateDetectionConfig()
        self.checker = checker or DuplicateChecker(config=self.config)
        self.pacer = pacer or FixedIntervalPacer(self.config.batch_delay_seconds)

    async def fetch_pool(self, new_questions: Sequence[Question]) -> List[ExistingQuestion]:
        """Fetch the shared comparison pool; a failing store counts as an empty pool."""
        candidate_filter = CandidateFilter.for_batch(list(new_questions))
        try:
            return await self.store.fetch_candidates(candidate_filter, self.config.batch_candidate_limit)
        except Exception as e:
            logger.error(f"Error fetching existing questions: {e}")
            return []

    async def batch_check(
        self,
        new_questions: Sequence[Question],
        similarity_threshold: Optional[float] = None
    ) -> List[BatchDuplicateCheckResult]:
        """
        Check every candidate in a batch.

        Args:
            new_questions: Candidate questions
            similarity_threshold: Top similarity at which a candidate counts as a duplicate

        Returns:
            One result per candidate, in input order, tagged with its index
        """
        if similarity_threshold is None:
            similarity_threshold = self.config.default_similarity_threshold

        existing_questions = await self.fetch_pool(new_questions)

        if not existing_questions:
            logger.info(f"No existing questions to compare against, {len(new_questions)} questions are safe")
            return [
                _tag(DuplicateCheckResult(confidence=1.0, recommendation=Recommendation.SAVE), index)
                for index in range(len(new_questions))
            ]

        logger.info(
            f"Checking {len(new_questions)} questions against {len(existing_questions)} existing questions "
            f"with threshold {similarity_threshold}"
        )
        paced = self.checker.uses_ai(len(existing_questions))
        results: List[BatchDuplicateCheckResult] = []

        for index, new_question in enumerate(new_questions):
            try:
                result = await self.checker.check_duplicate(new_question, existing_questions, similarity_threshold)
                results.append(_tag(result, index))
            except Exception as e:
                logger.error(f"Error checking question {index}: {e}")
                results.append(_tag(DuplicateCheckResult(confidence=0.0, recommendation=Recommendation.SAVE), index))

            if paced and index < len(new_questions) - 1:
                await self.pacer.wait()

        return results

    @staticmethod
    def summarize(results: Sequence[DuplicateCheckResult]) -> BatchCheckSummary:
        """Count rejects, reviews and saves across a batch."""
        return BatchCheckSummary(
            total=len(results),
            duplicates=sum(1 for r in results if r.recommendation == Recommendation.REJECT),
            warnings=sum(1 for r in results if r.recommendation == Recommendation.REVIEW),
            safe=sum(1 for r in results if r.recommendation == Recommendation.SAVE)
        )


def _tag(result: DuplicateCheckResult, index: int) -> BatchDuplicateCheckResult:
    return BatchDuplicateCheckResult(**result.model_dump(), question_index=index)
