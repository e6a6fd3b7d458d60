from typing import Any, Optional


class AnalyzerError(Exception):
    """Base class for errors raised by the analysis pipeline."""


class InvalidType(AnalyzerError):
    """The requested content type is not email, message or link."""

    def __init__(self, analysis_type: Any):
        self.analysis_type = analysis_type
        super().__init__(f"Invalid analysis type: {analysis_type!r}")


class UpstreamFailure(AnalyzerError):
    """The completion service could not produce a reply."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.provider = provider
        super().__init__(message)
