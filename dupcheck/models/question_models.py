"""
Question and verdict models for duplicate detection.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class Recommendation(str, Enum):
    """Suggested import action for a candidate question."""
    SAVE = "save"
    REVIEW = "review"
    REJECT = "reject"


class QuestionOption(BaseModel):
    """A single answer option of a choice-type question."""
    text: str = Field(..., description="Option text")
    is_correct: bool = Field(False, description="Whether this option is a correct answer")


class Question(BaseModel):
    """A candidate question that has not been persisted yet."""
    stem: str = Field(..., description="The question text")
    options: Optional[List[QuestionOption]] = Field(None, description="Ordered answer options for choice questions")
    explanation: Optional[str] = Field(None, description="Explanation of the correct answer")
    category: Optional[str] = Field(None, description="Question category")
    fields: List[str] = Field(default_factory=list, description="Field tags")
    topics: List[str] = Field(default_factory=list, description="Topic tags")

    @property
    def has_options(self) -> bool:
        return bool(self.options)

    @property
    def has_explanation(self) -> bool:
        return bool(self.explanation and self.explanation.strip())

    @property
    def correct_options(self) -> List[QuestionOption]:
        return [option for option in self.options or [] if option.is_correct]


class ExistingQuestion(Question):
    """A question already stored in the question bank."""
    id: str = Field(..., description="Persistent question identifier")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    is_archived: bool = Field(False, description="Archived questions are never compared against")


class SimilarityResult(BaseModel):
    """One existing question judged similar to a candidate."""
    question_id: str = Field(..., description="Identifier of the existing question")
    similarity: float = Field(..., ge=0.0, le=1.0, description="Similarity score")
    reason: str = Field(..., description="Human-readable justification")
    stem: str = Field(..., description="Stem of the matched existing question")


class DuplicateCheckResult(BaseModel):
    """Verdict for a single candidate question."""
    is_duplicate: bool = Field(False, description="Top similarity reached the threshold")
    similar_questions: List[SimilarityResult] = Field(default_factory=list, description="Similar questions, most similar first")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Self-reported certainty of the engine")
    recommendation: Recommendation = Field(Recommendation.SAVE, description="Suggested import action")

    @property
    def max_similarity(self) -> float:
        return self.similar_questions[0].similarity if self.similar_questions else 0.0


class BatchDuplicateCheckResult(DuplicateCheckResult):
    """Verdict for one element of a batch, tagged with its input position."""
    question_index: int = Field(..., ge=0, description="Position of the question in the input batch")


class BatchCheckSummary(BaseModel):
    """Counts of recommendations across a batch."""
    total: int = Field(0, description="Number of questions checked")
    duplicates: int = Field(0, description="Questions recommended for rejection")
    warnings: int = Field(0, description="Questions recommended for review")
    safe: int = Field(0, description="Questions safe to save")


class CandidateFilter(BaseModel):
    """Filter used to fetch the existing questions a batch is compared against."""
    categories: List[str] = Field(default_factory=list)
    fields: List[str] = Field(default_factory=list)

    @classmethod
    def for_batch(cls, questions: List[Question]) -> "CandidateFilter":
        categories: List[str] = []
        fields: List[str] = []
        for question in questions:
            if question.category and question.category not in categories:
                categories.append(question.category)
            for field in question.fields:
                if field not in fields:
                    fields.append(field)
        return cls(categories=categories, fields=fields)
