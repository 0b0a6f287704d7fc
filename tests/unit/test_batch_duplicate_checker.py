"""
Unit tests for BatchDuplicateChecker.

Tests pool fetching, pacing between completion calls, per-item failure
handling and result aggregation.
"""
import logging
import pytest
from unittest.mock import AsyncMock, MagicMock

from dupcheck.models.question_models import (
    Question, CandidateFilter, DuplicateCheckResult, Recommendation
)
from dupcheck.services.batch_duplicate_checker import BatchDuplicateChecker
from dupcheck.services.duplicate_checker import DuplicateChecker
from dupcheck.services.question_store import InMemoryQuestionStore
from dupcheck.utils.pacing import FixedIntervalPacer
from tests.conftest import make_existing


def _candidates(count):
    return [Question(stem=f"Explain container orchestration concept number {i}") for i in range(count)]


class TestBatchDuplicateChecker:
    """Test cases for BatchDuplicateChecker."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_pool_marks_everything_safe(self, recorded_sleeps):
        checker = MagicMock(spec=DuplicateChecker)
        checker.check_duplicate = AsyncMock()
        batch = BatchDuplicateChecker(
            InMemoryQuestionStore(), checker=checker, pacer=FixedIntervalPacer(0.5, recorded_sleeps)
        )

        results = await batch.batch_check(_candidates(3))

        assert [r.question_index for r in results] == [0, 1, 2]
        for result in results:
            assert result.is_duplicate is False
            assert result.similar_questions == []
            assert result.confidence == 1.0
            assert result.recommendation == Recommendation.SAVE
        checker.check_duplicate.assert_not_called()
        assert recorded_sleeps.delays == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_ai_failures_fall_back_and_are_paced(
        self, mock_completion_client, react_pool, recorded_sleeps
    ):
        """Five candidates, completion service down: all lexical, four pauses."""
        mock_completion_client.send_prompt.side_effect = RuntimeError("service unavailable")
        batch = BatchDuplicateChecker(
            InMemoryQuestionStore(react_pool),
            checker=DuplicateChecker(mock_completion_client),
            pacer=FixedIntervalPacer(0.5, recorded_sleeps)
        )

        results = await batch.batch_check(_candidates(5))

        assert len(results) == 5
        assert mock_completion_client.send_prompt.await_count == 5
        assert all(r.confidence == 0.7 for r in results)
        assert recorded_sleeps.delays == [0.5, 0.5, 0.5, 0.5]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_small_pool_is_not_paced(self, mock_completion_client, recorded_sleeps):
        pool = [make_existing("q-1", "What is a pod?"), make_existing("q-2", "What is a node?")]
        batch = BatchDuplicateChecker(
            InMemoryQuestionStore(pool),
            checker=DuplicateChecker(mock_completion_client),
            pacer=FixedIntervalPacer(0.5, recorded_sleeps)
        )

        results = await batch.batch_check(_candidates(5))

        assert len(results) == 5
        mock_completion_client.send_prompt.assert_not_called()
        assert recorded_sleeps.delays == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_without_client_is_not_paced(self, react_pool, recorded_sleeps, caplog):
        """No completion service means no calls to space out and nothing to warn about."""
        batch = BatchDuplicateChecker(
            InMemoryQuestionStore(react_pool),
            checker=DuplicateChecker(completion_client=None),
            pacer=FixedIntervalPacer(0.5, recorded_sleeps)
        )

        with caplog.at_level(logging.WARNING):
            results = await batch.batch_check(_candidates(5))

        assert len(results) == 5
        assert all(r.confidence == 0.7 for r in results)
        assert recorded_sleeps.delays == []
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_single_candidate_is_not_paced(self, mock_completion_client, react_pool, recorded_sleeps):
        mock_completion_client.send_prompt.return_value = '{"similarities": []}'
        batch = BatchDuplicateChecker(
            InMemoryQuestionStore(react_pool),
            checker=DuplicateChecker(mock_completion_client),
            pacer=FixedIntervalPacer(0.5, recorded_sleeps)
        )

        await batch.batch_check(_candidates(1))

        assert recorded_sleeps.delays == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_per_item_failure_does_not_abort_batch(self, react_pool, recorded_sleeps):
        """A blank stem fails its own check only."""
        batch = BatchDuplicateChecker(
            InMemoryQuestionStore(react_pool),
            pacer=FixedIntervalPacer(0.5, recorded_sleeps)
        )
        questions = [
            Question(stem="What does the useState hook return in React?"),
            Question(stem=""),
            Question(stem="How does Docker bridge networking work?"),
        ]

        results = await batch.batch_check(questions)

        assert [r.question_index for r in results] == [0, 1, 2]
        failed = results[1]
        assert failed.confidence == 0.0
        assert failed.recommendation == Recommendation.SAVE
        assert failed.similar_questions == []
        assert failed.is_duplicate is False
        assert results[0].is_duplicate is True
        assert results[0].similar_questions[0].question_id == "react-1"
        assert results[2].similar_questions == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_store_failure_counts_as_empty_pool(self):
        store = MagicMock()
        store.fetch_candidates = AsyncMock(side_effect=ConnectionError("database down"))
        batch = BatchDuplicateChecker(store)

        results = await batch.batch_check(_candidates(2))

        assert all(r.recommendation == Recommendation.SAVE and r.confidence == 1.0 for r in results)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_pool_fetched_once_with_batch_filter(self, react_pool):
        store = MagicMock()
        store.fetch_candidates = AsyncMock(return_value=react_pool[:2])
        batch = BatchDuplicateChecker(store)
        questions = [
            Question(stem="What is JSX?", category="Frontend", fields=["React"]),
            Question(stem="What is a Dockerfile?", category="DevOps", fields=["Docker", "React"]),
            Question(stem="What is a volume?", category="DevOps"),
        ]

        await batch.batch_check(questions)

        store.fetch_candidates.assert_awaited_once()
        candidate_filter, limit = store.fetch_candidates.call_args.args
        assert candidate_filter == CandidateFilter(categories=["Frontend", "DevOps"], fields=["React", "Docker"])
        assert limit == 200

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_threshold_is_passed_through(self, react_pool):
        checker = MagicMock(spec=DuplicateChecker)
        checker.uses_ai.return_value = False
        checker.check_duplicate = AsyncMock(
            return_value=DuplicateCheckResult(confidence=0.7, recommendation=Recommendation.SAVE)
        )
        batch = BatchDuplicateChecker(InMemoryQuestionStore(react_pool), checker=checker)
        questions = _candidates(2)

        await batch.batch_check(questions, 0.65)

        for call, question in zip(checker.check_duplicate.call_args_list, questions):
            assert call.args[0] is question
            assert call.args[2] == 0.65


class TestSummarize:
    """Test cases for batch summaries."""

    @pytest.mark.unit
    def test_summarize_counts_recommendations(self):
        results = [
            DuplicateCheckResult(confidence=0.9, recommendation=Recommendation.REJECT),
            DuplicateCheckResult(confidence=0.9, recommendation=Recommendation.REVIEW),
            DuplicateCheckResult(confidence=0.9, recommendation=Recommendation.REVIEW),
            DuplicateCheckResult(confidence=0.9, recommendation=Recommendation.SAVE),
        ]

        summary = BatchDuplicateChecker.summarize(results)

        assert summary.total == 4
        assert summary.duplicates == 1
        assert summary.warnings == 2
        assert summary.safe == 1

    @pytest.mark.unit
    def test_summarize_empty(self):
        summary = BatchDuplicateChecker.summarize([])
        assert (summary.total, summary.duplicates, summary.warnings, summary.safe) == (0, 0, 0, 0)
