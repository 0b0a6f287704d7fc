"""
Parser for similarity analyses returned by the completion service.

Completions are untrusted input: anything that is not a JSON object matching
the SimilarityAnalysis schema is rejected with UpstreamParseError.
"""
import json
import re
from pydantic import ValidationError as SchemaValidationError
from dupcheck.exceptions import UpstreamParseError
from dupcheck.models.similarity_analysis import SimilarityAnalysis
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


class ResponseParser:
    """Parses completion text into a validated SimilarityAnalysis."""

    @staticmethod
    def strip_code_fences(response_text: str) -> str:
        """Remove Markdown code fences around a JSON payload."""
        cleaned = _JSON_FENCE.sub("", response_text.strip())
        return _FENCE.sub("", cleaned).strip()

    def parse_similarity_analysis(self, response_text: str) -> SimilarityAnalysis:
        """
        Parse a similarity analysis from AI completion text.

        Args:
            response_text: Raw completion text

        Returns:
            Validated SimilarityAnalysis

        Raises:
            UpstreamParseError: If the text is empty, not JSON, or has the wrong shape
        """
        if not response_text or not response_text.strip():
            raise UpstreamParseError("Invalid response from AI service")

        content = self.strip_code_fences(response_text)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse AI similarity analysis: {content[:200]}")
            raise UpstreamParseError(
                "AI similarity analysis returned invalid format",
                context={"error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise UpstreamParseError(
                "AI similarity analysis must be a JSON object",
                context={"type": type(data).__name__}
            )

        try:
            return SimilarityAnalysis.model_validate(data)
        except SchemaValidationError as e:
            logger.error(f"AI similarity analysis has unexpected shape: {e.error_count()} errors")
            raise UpstreamParseError(
                "AI similarity analysis has unexpected shape",
                context={"errors": e.errors()}
            ) from e
