"""
Prompt construction for the completion service.

The instruction block is fixed; only the rendered user content changes
between requests, and the same input always renders to the same text.
"""
from typing import Any, Mapping, Optional, Union

from errors import InvalidType
from models import AnalysisType

PROMPT_VERSION = "2"

SYSTEM_PROMPT = """You are an elite cybersecurity expert and digital forensics specialist with 15+ years of experience in detecting scams, phishing attempts, and malicious communications.

ANALYSIS REQUIREMENTS:
- Provide a verdict: SCAM, NOT A SCAM, or SUSPICIOUS
- Assign confidence level: High, Medium, or Low
- Give a risk score from 0-100 (0 = completely safe, 100 = definitely malicious)
- Provide clear explanation of your reasoning
- List specific red flags found
- Categorize the type of threat if applicable

CRITICAL RED FLAGS:
- Urgent language ("Act now!", "Limited time!", "Expires today!")
- Requests for sensitive information (passwords, SSN, bank details, verification codes)
- Suspicious URLs or domains (typos, unusual TLDs, URL shorteners)
- Impersonation of legitimate companies with slight variations
- Poor grammar/spelling from supposed official sources
- Unexpected attachments or download requests
- Prize/lottery claims without participation
- Romance scams or emotional manipulation tactics
- Investment scams or unrealistic profit promises
- Tech support scams claiming computer infections
- Advance fee fraud
- Cryptocurrency or payment app scams
- Fake delivery notifications
- Phishing for login credentials

SUSPICIOUS INDICATORS:
- Generic greetings ("Dear Customer", "Dear Sir/Madam")
- Mismatched sender domains
- Pressure tactics or artificial urgency
- Requests to click links or download files
- Unusual payment methods requested
- Emotional appeals or sob stories
- Offers that seem too good to be true

LEGITIMATE INDICATORS:
- Proper company branding and formatting
- Consistent grammar and professional language
- Sender domain matching the company
- No requests for sensitive information
- Clear and reasonable purpose

RESPONSE FORMAT:
Return a JSON object with:
{
  "verdict": "SCAM|NOT A SCAM|SUSPICIOUS",
  "confidence": "High|Medium|Low",
  "score": number (0-100),
  "explanation": "detailed reasoning",
  "redFlags": ["list", "of", "specific", "issues"],
  "category": "type of scam if applicable"
}

Be extremely thorough and err on the side of caution. If something seems even slightly suspicious, flag it."""

ANALYZE_INSTRUCTION = "Analyze this content for scams, phishing, and malicious intent:"

# Placeholders for absent fields
NO_SUBJECT = "No subject"
UNKNOWN_SENDER = "Unknown sender"
NO_CONTENT = "No content"
NO_URL = "No URL"
NO_CONTEXT = "No context provided"


def _field(content: Mapping[str, Any], key: str, placeholder: str) -> str:
    value = content.get(key)
    if value is None:
        return placeholder
    text = value if isinstance(value, str) else str(value)
    return text if text else placeholder


def resolve_type(analysis_type: Union[str, AnalysisType]) -> AnalysisType:
    try:
        return AnalysisType(analysis_type)
    except ValueError:
        raise InvalidType(analysis_type) from None


def render_content(analysis_type: AnalysisType, content: Mapping[str, Any]) -> str:
    if analysis_type is AnalysisType.EMAIL:
        return "\n".join([
            "EMAIL ANALYSIS:",
            f"Subject: {_field(content, 'subject', NO_SUBJECT)}",
            f"From: {_field(content, 'sender', UNKNOWN_SENDER)}",
            f"Body: {_field(content, 'body', NO_CONTENT)}",
        ])
    if analysis_type is AnalysisType.MESSAGE:
        return "\n".join([
            "MESSAGE ANALYSIS:",
            f"Content: {_field(content, 'text', NO_CONTENT)}",
        ])
    return "\n".join([
        "LINK ANALYSIS:",
        f"URL: {_field(content, 'url', NO_URL)}",
        f"Context: {_field(content, 'context', NO_CONTEXT)}",
    ])


def build_prompt(analysis_type: Union[str, AnalysisType],
                 content: Optional[Mapping[str, Any]] = None) -> str:
    """
    Returns the full prompt for one piece of content.
    Raises InvalidType if the type is not email, message or link.
    """
    resolved = resolve_type(analysis_type)
    rendered = render_content(resolved, content or {})
    return f"{SYSTEM_PROMPT}\n\n{ANALYZE_INSTRUCTION}\n\n{rendered}"
