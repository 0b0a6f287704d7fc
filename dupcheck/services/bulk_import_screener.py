"""
Bulk Import Screener

Turns duplicate-check verdicts into per-question import actions for a bulk
import. Persisting the accepted questions is the caller's job.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel, Field, field_validator
from dupcheck.models.question_models import (
    Question, BatchDuplicateCheckResult, BatchCheckSummary, Recommendation
)
from dupcheck.services.batch_duplicate_checker import BatchDuplicateChecker
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)


class ImportAction(str, Enum):
    PERSIST = "persist"
    FLAG_FOR_REVIEW = "flag_for_review"
    SKIP = "skip"


ACTION_BY_RECOMMENDATION = {
    Recommendation.SAVE: ImportAction.PERSIST,
    Recommendation.REVIEW: ImportAction.FLAG_FOR_REVIEW,
    Recommendation.REJECT: ImportAction.SKIP,
}


class BulkImportRequest(BaseModel):
    """Request model for screening a bulk import."""
    questions: List[Question] = Field(..., min_length=1, description="Questions to import")
    skip_duplicate_check: bool = Field(False, description="Bypass duplicate detection and persist everything")
    similarity_threshold: float = Field(0.8, ge=0.5, le=1.0, description="Duplicate threshold")

    @field_validator('questions')
    @classmethod
    def validate_stems(cls, v):
        """Every question needs a non-blank stem."""
        for i, question in enumerate(v):
            if not question.stem.strip():
                raise ValueError(f'Question {i + 1}: stem is required and must be non-empty')
        return v


class ImportDecision(BaseModel):
    """What to do with one question of the import."""
    question_index: int = Field(..., ge=0)
    action: ImportAction
    duplicate_check: BatchDuplicateCheckResult


class BulkImportScreeningResponse(BaseModel):
    """Response model for bulk import screening."""
    decisions: List[ImportDecision] = Field(default_factory=list)
    summary: BatchCheckSummary
    duplicate_check_skipped: bool = Field(False)

    @property
    def to_persist(self) -> List[int]:
        return [d.question_index for d in self.decisions if d.action == ImportAction.PERSIST]

    @property
    def to_review(self) -> List[int]:
        return [d.question_index for d in self.decisions if d.action == ImportAction.FLAG_FOR_REVIEW]

    @property
    def to_skip(self) -> List[int]:
        return [d.question_index for d in self.decisions if d.action == ImportAction.SKIP]


class BulkImportScreener:
    """Decides which questions of a bulk import to persist, flag or skip."""

    def __init__(self, batch_checker: BatchDuplicateChecker):
        self.batch_checker = batch_checker

    async def screen(self, request: BulkImportRequest) -> BulkImportScreeningResponse:
        if request.skip_duplicate_check:
            logger.info(f"Duplicate check skipped for {len(request.questions)} questions")
            results = [
                BatchDuplicateCheckResult(
                    confidence=1.0, recommendation=Recommendation.SAVE, question_index=index
                )
                for index in range(len(request.questions))
            ]
        else:
            results = await self.batch_checker.batch_check(request.questions, request.similarity_threshold)

        summary = BatchDuplicateChecker.summarize(results)
        logger.info(
            f"Bulk import screened: {summary.duplicates} duplicates, "
            f"{summary.warnings} warnings, {summary.safe} safe"
        )
        return BulkImportScreeningResponse(
            decisions=[
                ImportDecision(
                    question_index=result.question_index,
                    action=ACTION_BY_RECOMMENDATION[result.recommendation],
                    duplicate_check=result
                )
                for result in results
            ],
            summary=summary,
            duplicate_check_skipped=request.skip_duplicate_check
        )
