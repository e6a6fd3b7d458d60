from groq import Groq
from typing import Optional
import logging

from errors import UpstreamFailure

class CompletionClient:
    """
    Sends a prompt to the completion service and returns the raw reply text.
    Groq is used when its key is set, OpenAI otherwise.
    """

    def __init__(self,
                 groq_api_key: Optional[str] = None,
                 openai_api_key: Optional[str] = None,
                 groq_model: str = "llama-3.1-8b-instant",
                 openai_model: str = "gpt-4o-mini",
                 temperature: float = 0.1):
        self.client = None
        self.provider = None
        self.model = None
        self.temperature = temperature

        if groq_api_key:
            try:
                self.client = Groq(api_key=groq_api_key)
                self.provider = "groq"
                self.model = groq_model
                logging.info(f"Using Groq API ({groq_model})")
            except Exception as e:
                logging.error(f"Failed to initialize Groq client: {e}")
        if self.client is None and openai_api_key:
            try:
                import openai
                self.client = openai.OpenAI(api_key=openai_api_key)
                self.provider = "openai"
                self.model = openai_model
                logging.info(f"Using OpenAI API ({openai_model})")
            except Exception as e:
                logging.error(f"Failed to initialize OpenAI client: {e}")

        if self.client is None:
            logging.warning("No completion provider configured; every analysis will fail upstream")

    def complete(self, prompt: str) -> str:
        """
        Returns the raw completion text for a single-message prompt.
        Raises UpstreamFailure on any provider error or empty reply.
        """
        if not self.client:
            raise UpstreamFailure("No completion provider configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
                temperature=self.temperature,
            )
            text = response.choices[0].message.content
        except Exception as e:
            logging.error(f"LLM Error ({self.provider}): {e}")
            raise UpstreamFailure(f"Completion request failed: {e}", provider=self.provider) from e

        if not text or not text.strip():
            logging.error(f"LLM Error ({self.provider}): empty completion")
            raise UpstreamFailure("Completion service returned an empty reply", provider=self.provider)
        return text.strip()
