"""
Schema of the similarity analysis returned by the completion service.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class AISimilarityEntry(BaseModel):
    """One similarity judgement reported by the model."""
    question_id: Optional[str] = Field(None, alias="questionId")
    similarity: Optional[float] = Field(None, description="Reported similarity, not yet clamped")
    reason: Optional[str] = Field(None)
    is_duplicate: Optional[bool] = Field(None, alias="isDuplicate")

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True


class OverallAssessment(BaseModel):
    """Overall verdict reported by the model."""
    max_similarity: Optional[float] = Field(None, alias="maxSimilarity")
    is_duplicate: Optional[bool] = Field(None, alias="isDuplicate")
    confidence: Optional[float] = Field(None)
    recommendation: Optional[str] = Field(None)
    summary: Optional[str] = Field(None)

    class Config:
        populate_by_name = True


class SimilarityAnalysis(BaseModel):
    """Top-level JSON document the completion service must return."""
    similarities: List[AISimilarityEntry] = Field(default_factory=list)
    overall_assessment: Optional[OverallAssessment] = Field(None, alias="overallAssessment")

    class Config:
        populate_by_name = True
