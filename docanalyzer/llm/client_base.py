from abc import ABC, abstractmethod


class BaseLlmClient(ABC):
    """Contract for provider-specific generative text clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return the provider response as plain text.

        Raises:
            LlmProviderError: on network or provider-side failure.
        """
