import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from bot.exceptions import ProviderError

logger = logging.getLogger(__name__)

# Rate limits, network problems and 5xx are worth retrying; the rest is config/auth
_TRANSIENT_ERRORS = (
    openai.RateLimitError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


class ContentProvider:
    """Async client for an OpenAI-compatible chat completions API."""

    def __init__(self, api_key: str, base_url: str, model: str, timeout: float = 60.0):
        self.model = model
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    async def submit(
        self,
        prompt: str,
        system_instruction: str,
        schema: Optional[dict] = None,
        schema_name: str = "response",
    ) -> str:
        """
        Send one prompt and return the raw response text.

        With a schema the provider is asked for JSON matching it; without one
        the answer is free text.

        Raises:
            ProviderError: transport, quota, server or auth failure
        """
        kwargs = {}
        if schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": schema},
            }

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": prompt},
                ],
                **kwargs,
            )
        except _TRANSIENT_ERRORS as e:
            raise ProviderError(f"Provider request failed: {e}", transient=True) from e
        except openai.APIError as e:
            raise ProviderError(f"Provider rejected the request: {e}", transient=False) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ProviderError("Provider returned an empty response", transient=True)
        return content

    async def close(self) -> None:
        await self._client.close()
