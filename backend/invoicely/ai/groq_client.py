"""
Groq API Client: thin wrapper around chat completions.

Returns the completion text, or None on any error so callers can fall back to
a static default. The API key is never logged.
"""

import logging
import time
from typing import Dict, List, Optional

from groq import Groq, APIError, APITimeoutError, RateLimitError

from invoicely.core.config import settings

logger = logging.getLogger(__name__)


class GroqClient:
    """
    Minimal wrapper for the Groq API.

    - Temperature: 0.2 (stable categories, slightly varied descriptions)
    - Max tokens: 300 (descriptions are a short paragraph, categories a small JSON object)
    - Retries: timeouts and rate limits, with exponential backoff
    """

    TEMPERATURE = 0.2
    MAX_TOKENS = 300

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize Groq client with API key from environment."""
        api_key = api_key if api_key is not None else settings.GROQ_API_KEY
        self.model = model or settings.GROQ_MODEL

        if not api_key:
            logger.warning(
                "GROQ_API_KEY not found in environment. "
                "AI descriptions and categorization will use static defaults."
            )
            self.client = None
        else:
            try:
                self.client = Groq(api_key=api_key, timeout=settings.AI_TIMEOUT_SECONDS, max_retries=0)
                logger.info("Groq client initialized")
            except Exception as e:
                logger.error(f"Failed to initialize Groq client: {e}")
                self.client = None

    def is_available(self) -> bool:
        """Check if Groq client is ready to use."""
        return self.client is not None

    def complete(
        self,
        messages: List[Dict[str, str]],
        json_mode: bool = False,
        max_retries: int = 2,
    ) -> Optional[str]:
        """
        Run one chat completion with retry logic.

        Args:
            messages: Chat messages (system + user)
            json_mode: Ask the model for a single JSON object
            max_retries: Number of retries for transient failures

        Returns:
            Completion text, or None if unavailable, empty or failed
        """
        if not self.is_available():
            logger.debug("Groq client not available - skipping LLM call")
            return None

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        for attempt in range(max_retries + 1):
            try:
                response = self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.TEMPERATURE,
                    max_tokens=self.MAX_TOKENS,
                    stream=False,
                    **kwargs,
                )

                if response.choices and response.choices[0].message.content:
                    content = response.choices[0].message.content.strip()
                    logger.debug(f"LLM response received: {len(content)} chars (attempt {attempt+1})")
                    return content or None
                logger.warning("LLM returned empty response")
                return None

            except APITimeoutError:
                if attempt < max_retries:
                    wait_time = 0.5 * (2 ** attempt)  # 0.5s, 1s
                    logger.warning(f"Groq timeout, retry {attempt+1}/{max_retries} after {wait_time}s")
                    time.sleep(wait_time)
                else:
                    logger.warning(f"Groq API timeout after {max_retries} retries")
                    return None

            except RateLimitError:
                if attempt < max_retries:
                    wait_time = 1.0 * (2 ** attempt)  # 1s, 2s
                    logger.warning(f"Groq rate limit, retry {attempt+1}/{max_retries} after {wait_time}s")
                    time.sleep(wait_time)
                else:
                    logger.warning("Groq API rate limit exceeded after retries")
                    return None

            except APIError as e:
                logger.error(f"Groq API error (permanent): {e}")
                return None

            except Exception as e:
                logger.error(f"Unexpected error calling Groq: {type(e).__name__}: {e}")
                return None

        return None


# Singleton instance
_groq_client: Optional[GroqClient] = None


def get_groq_client() -> GroqClient:
    """Get or create singleton Groq client instance."""
    global _groq_client
    if _groq_client is None:
        _groq_client = GroqClient()
    return _groq_client
