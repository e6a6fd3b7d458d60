import logging
from typing import Any, Mapping, Optional, Protocol, Union

from errors import AnalyzerError, UpstreamFailure
from models import AnalysisResult, AnalysisType, Confidence, Verdict
from normalizer import normalize
from prompt_builder import build_prompt

FAILED_EXPLANATION = "Unable to complete analysis due to technical error. Please check your API configuration."
FAILED_RED_FLAGS = ["Analysis error - API configuration issue"]


class Completion(Protocol):
    def complete(self, prompt: str) -> str: ...


def failed_result() -> AnalysisResult:
    """Degraded record reported when the completion service is unreachable."""
    return AnalysisResult(
        verdict=Verdict.SUSPICIOUS,
        confidence=Confidence.LOW,
        score=50,
        explanation=FAILED_EXPLANATION,
        redFlags=list(FAILED_RED_FLAGS),
    )


class ScamAnalyzer:
    def __init__(self, completion: Completion):
        self.completion = completion

    def analyze(self, analysis_type: Union[str, AnalysisType],
                content: Optional[Mapping[str, Any]] = None) -> AnalysisResult:
        """
        Builds the prompt, asks the completion service and normalizes its reply.
        Raises InvalidType for unknown types and UpstreamFailure when the
        completion call fails; a malformed reply never raises.
        """
        prompt = build_prompt(analysis_type, content)
        try:
            raw_text = self.completion.complete(prompt)
        except AnalyzerError:
            raise
        except Exception as e:
            logging.error(f"Completion call failed: {e}")
            raise UpstreamFailure(f"Completion call failed: {e}") from e
        result = normalize(raw_text)
        logging.info(f"Analysis [{analysis_type}] -> {result.verdict} ({result.confidence}, score={result.score})")
        return result
