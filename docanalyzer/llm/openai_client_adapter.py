import httpx
import openai

from docanalyzer.llm.client_base import BaseLlmClient
from docanalyzer.llm.exceptions import LlmProviderError


class OpenAIClientAdapter(BaseLlmClient):
    """Client for any provider exposing the OpenAI chat completions API.

    SDK-level retries are disabled: ModelInvoker owns the attempt count.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise LlmProviderError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise LlmProviderError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
