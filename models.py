from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any

class AnalysisType(str, Enum):
    EMAIL = "email"
    MESSAGE = "message"
    LINK = "link"

class Verdict(str, Enum):
    SCAM = "SCAM"
    NOT_A_SCAM = "NOT A SCAM"
    SUSPICIOUS = "SUSPICIOUS"

class Confidence(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

# Content shapes per type (documented for API clients, all fields optional text):
#   email   -> {subject, sender, body}
#   message -> {text}
#   link    -> {url, context}
class AnalysisRequest(BaseModel):
    # Plain string so unknown types reach the 400 branch instead of a 422
    type: str
    content: Optional[Dict[str, Any]] = None

class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)

    verdict: Verdict = Verdict.SUSPICIOUS
    confidence: Confidence = Confidence.MEDIUM
    score: int = Field(default=50, ge=0, le=100)
    explanation: str = ""
    red_flags: List[str] = Field(default_factory=list, alias="redFlags")
    category: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        """JSON body as the front end expects it: camelCase, no null category."""
        return self.model_dump(by_alias=True, exclude_none=True)

class AnalysisErrorResponse(AnalysisResult):
    error: str
