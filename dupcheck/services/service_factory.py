"""
Service factory wiring the duplicate detection services together.
"""
from typing import Optional
from dupcheck.config import Settings, get_settings
from dupcheck.services.batch_duplicate_checker import BatchDuplicateChecker
from dupcheck.services.bulk_import_screener import BulkImportScreener
from dupcheck.services.completion_client import CompletionClient, get_completion_client
from dupcheck.services.duplicate_checker import DuplicateChecker
from dupcheck.services.duplicate_config import DuplicateDetectionConfig
from dupcheck.services.question_store import QuestionStore
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)


class ServiceFactory:
    """Builds duplicate detection services from settings."""

    def __init__(self, settings: Optional[Settings] = None, config: Optional[DuplicateDetectionConfig] = None):
        self.settings = settings or get_settings()
        self.config = config or DuplicateDetectionConfig.from_settings(self.settings)

    def create_duplicate_checker(
        self,
        completion_client: Optional[CompletionClient] = None,
        use_ai: bool = True
    ) -> DuplicateChecker:
        if not use_ai:
            completion_client = None
        elif completion_client is None:
            completion_client = get_completion_client(self.settings)
        logger.info(f"Duplicate checker created, AI {'enabled' if completion_client else 'disabled'}")
        return DuplicateChecker(completion_client=completion_client, config=self.config)

    def create_batch_checker(
        self,
        store: QuestionStore,
        completion_client: Optional[CompletionClient] = None,
        use_ai: bool = True
    ) -> BatchDuplicateChecker:
        checker = self.create_duplicate_checker(completion_client, use_ai)
        return BatchDuplicateChecker(store=store, checker=checker, config=self.config)

    def create_bulk_import_screener(
        self,
        store: QuestionStore,
        completion_client: Optional[CompletionClient] = None,
        use_ai: bool = True
    ) -> BulkImportScreener:
        return BulkImportScreener(self.create_batch_checker(store, completion_client, use_ai))
