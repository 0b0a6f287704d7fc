"""
Question Store

Read-only access to the existing questions a candidate batch is compared
against. The real question bank lives elsewhere; this module defines the
interface the checker consumes plus in-memory and JSON-export backends.
"""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union
from dupcheck.models.question_models import ExistingQuestion, CandidateFilter
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class QuestionStore(Protocol):
    """Source of existing questions for duplicate comparison."""

    async def fetch_candidates(self, candidate_filter: CandidateFilter, limit: int) -> List[ExistingQuestion]:
        ...


class InMemoryQuestionStore:
    """Question store over a list of existing questions held in memory."""

    def __init__(self, questions: Optional[Iterable[ExistingQuestion]] = None):
        self.questions: List[ExistingQuestion] = list(questions or [])

    async def fetch_candidates(self, candidate_filter: CandidateFilter, limit: int) -> List[ExistingQuestion]:
        """
        Get non-archived questions matching the filter, most recent first.

        Args:
            candidate_filter: Categories (any of) and fields (shares any); empty means unfiltered
            limit: Maximum number of questions returned

        Returns:
            List of ExistingQuestion objects
        """
        categories = set(candidate_filter.categories)
        fields = set(candidate_filter.fields)

        matches = [
            question for question in self.questions
            if not question.is_archived
            and (not categories or question.category in categories)
            and (not fields or fields.intersection(question.fields))
        ]
        matches.sort(key=_created_at_key, reverse=True)

        logger.debug(f"Fetched {min(len(matches), limit)} of {len(matches)} candidate questions")
        return matches[:limit]

    def stats(self) -> Dict[str, Any]:
        """Total non-archived questions and counts per category."""
        counts: Dict[str, int] = {}
        active = [question for question in self.questions if not question.is_archived]
        for question in active:
            category = question.category or "Uncategorized"
            counts[category] = counts.get(category, 0) + 1
        return {
            "total_questions": len(active),
            "category_counts": [
                {"category": category, "count": count}
                for category, count in sorted(counts.items())
            ]
        }


class JsonFileQuestionStore(InMemoryQuestionStore):
    """In-memory question store loaded from a JSON export of the question bank."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(self._load(self.path))
        logger.info(f"Loaded {len(self.questions)} questions from {self.path}")

    @staticmethod
    def _load(path: Path) -> List[ExistingQuestion]:
        with path.open(encoding="utf-8") as handle:
            data = json.load(handle)
        if isinstance(data, dict):
            data = data.get("questions", [])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of questions in {path}")
        return [ExistingQuestion.model_validate(item) for item in data]


def _created_at_key(question: ExistingQuestion) -> datetime:
    created_at = question.created_at
    if created_at is None:
        return _OLDEST
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at
