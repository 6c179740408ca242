"""Gemini model invocation for budget optimization."""
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from financeflow.utils.logger import get_logger
from financeflow.utils.exceptions import InvocationFailed

logger = get_logger()

DEFAULT_MODEL_NAME = "gemini-2.5-flash-lite"

SYSTEM_INSTRUCTION = (
    "You are a financial advisor. You answer with a single JSON object mapping "
    "budget categories to suggested amounts."
)


class GeminiModelInvoker:
    """Sends rendered prompts to Gemini and returns the raw completion text.

    The client is built once by the caller and shared; every call is a fresh
    request with no retries and no caching.
    """

    def __init__(self, client: genai.Client, model_name: str = DEFAULT_MODEL_NAME,
                 temperature: Optional[float] = None):
        """
        Initialize invoker.

        Args:
            client: Configured google-genai client
            model_name: Gemini model to call
            temperature: Sampling temperature, model default when None
        """
        self.client = client
        self.model_name = model_name
        self.temperature = temperature

    def invoke(self, prompt: str, output_schema: Optional[Dict[str, Any]] = None) -> str:
        """
        Call the model once.

        Args:
            prompt: Rendered prompt
            output_schema: JSON schema hint for the response

        Returns:
            Raw response text (not yet validated)

        Raises:
            InvocationFailed: the call raised, or returned no text
        """
        logger.debug(f"Calling {self.model_name} ({len(prompt)} prompt chars)")
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self._build_config(output_schema)
            )
        except Exception as e:
            raise InvocationFailed(f"Budget optimization call to {self.model_name} failed: {e}", cause=e) from e

        return self._response_text(response)

    async def ainvoke(self, prompt: str, output_schema: Optional[Dict[str, Any]] = None) -> str:
        """Async variant of invoke using the client's aio surface."""
        logger.debug(f"Calling {self.model_name} asynchronously ({len(prompt)} prompt chars)")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self._build_config(output_schema)
            )
        except Exception as e:
            raise InvocationFailed(f"Budget optimization call to {self.model_name} failed: {e}", cause=e) from e

        return self._response_text(response)

    def _build_config(self, output_schema: Optional[Dict[str, Any]]) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION,
            response_mime_type="application/json",
            response_json_schema=output_schema,
            temperature=self.temperature
        )

    def _response_text(self, response) -> str:
        text = getattr(response, "text", None)
        if not text:
            raise InvocationFailed(f"{self.model_name} returned an empty response")
        logger.debug(f"Model response (first 200 chars): {text[:200]}")
        return text
