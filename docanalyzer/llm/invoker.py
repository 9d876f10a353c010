"""Single provider call with a per-attempt timeout and a bounded retry count."""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from docanalyzer.llm.client_base import BaseLlmClient
from docanalyzer.llm.exceptions import (
    EmptyResponseError,
    LlmProviderError,
    ModelTimeoutError,
)
from docanalyzer.logging.logger import Log


class ModelInvoker:
    """Calls the provider client, racing each attempt against a timeout.

    A timed-out attempt is abandoned rather than cancelled: its worker thread
    may still finish, but the result is discarded. Attempts never overlap in
    the caller's view; the next one starts only after the previous one has
    failed or timed out.
    """

    def __init__(
        self,
        *,
        client: BaseLlmClient,
        model: str,
        temperature: float = 0.2,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._system_prompt = system_prompt

    def invoke(self, prompt: str, *, timeout_seconds: float, max_attempts: int) -> str:
        """Return the raw model text.

        Raises:
            ModelTimeoutError: the last attempt timed out.
            LlmProviderError: the last attempt failed at the provider.
            EmptyResponseError: an attempt succeeded with blank text; never retried.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        # One worker per attempt so an abandoned call cannot block the next one.
        executor = ThreadPoolExecutor(max_workers=max_attempts, thread_name_prefix="llm-call")
        last_error: LlmProviderError | None = None
        try:
            for attempt in range(1, max_attempts + 1):
                Log.debug("Calling model", model=self._model, attempt=attempt)
                future = executor.submit(self._call, prompt)
                try:
                    text = future.result(timeout=timeout_seconds)
                except FutureTimeoutError:
                    future.cancel()
                    last_error = ModelTimeoutError(
                        f"AI request timed out after {timeout_seconds}s"
                    )
                except LlmProviderError as exc:
                    last_error = exc
                else:
                    if not text or not text.strip():
                        raise EmptyResponseError("AI returned an empty response")
                    Log.debug(f"Model raw response:\n{text}")
                    return text
                Log.warning(
                    f"Model attempt failed: {last_error}",
                    attempt=attempt,
                    max_attempts=max_attempts,
                )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        assert last_error is not None
        raise last_error

    def _call(self, prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )
