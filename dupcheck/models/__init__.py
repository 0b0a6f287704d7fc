# Models package for Pydantic schemas

from .question_models import (
    Recommendation, QuestionOption, Question, ExistingQuestion, SimilarityResult,
    DuplicateCheckResult, BatchDuplicateCheckResult, BatchCheckSummary, CandidateFilter
)
from .similarity_analysis import AISimilarityEntry, OverallAssessment, SimilarityAnalysis

__all__ = [
    "Recommendation", "QuestionOption", "Question", "ExistingQuestion", "SimilarityResult",
    "DuplicateCheckResult", "BatchDuplicateCheckResult", "BatchCheckSummary", "CandidateFilter",
    "AISimilarityEntry", "OverallAssessment", "SimilarityAnalysis"
]
