"""
Custom exception hierarchy for the duplicate checker.
"""

from typing import Dict, Any

class DupCheckException(Exception):
    """Base exception for the duplicate checker."""
    def __init__(self, message: str, context: Dict[str, Any] = None):
        super().__init__(message)
        self.context = context or {}

class ValidationError(DupCheckException):
    """Raised when a candidate question is missing required input."""
    pass

class AIServiceError(DupCheckException):
    """Base exception for completion service errors."""
    pass

class UpstreamCallError(AIServiceError):
    """Raised when the completion service cannot be reached or refuses the call."""
    pass

class UpstreamParseError(AIServiceError):
    """Raised when a completion cannot be parsed into a similarity analysis."""
    pass

class ConfigurationError(DupCheckException):
    """Raised when there are configuration issues."""
    pass
