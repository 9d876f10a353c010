from typing import ClassVar

from docanalyzer.config.exceptions import ConfigurationError
from docanalyzer.config.settings import Settings
from docanalyzer.llm.client_base import BaseLlmClient
from docanalyzer.llm.example_client_adapter import ExampleClientAdapter
from docanalyzer.llm.invoker import ModelInvoker
from docanalyzer.llm.openai_client_adapter import OpenAIClientAdapter


class LlmClientFactory:
    """Creates the configured provider client and the invoker around it."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"example", "ollama"})

    @classmethod
    def create_client(cls, settings: Settings) -> BaseLlmClient:
        """Build the provider client once at startup.

        Raises:
            ConfigurationError: unknown provider, or a missing credential or
                base URL the provider needs.
        """
        provider = settings.llm_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()

        base_url = cls._resolve_base_url(provider, settings)
        api_key = settings.llm_api_key.strip()
        if not api_key:
            if provider not in cls.KEYLESS_PROVIDERS:
                raise ConfigurationError(
                    f"LLM_API_KEY is required for llm_provider={provider}"
                )
            api_key = provider
        if not settings.llm_model_name.strip():
            raise ConfigurationError("LLM_MODEL_NAME must not be empty")

        return OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def create_invoker(cls, settings: Settings) -> ModelInvoker:
        provider = settings.llm_provider.lower()
        model = "example" if provider == "example" else settings.llm_model_name
        return ModelInvoker(
            client=cls.create_client(settings),
            model=model,
            temperature=settings.llm_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.llm_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ConfigurationError(
                    "LLM_BASE_URL is required for llm_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ConfigurationError(
            f"Unknown LLM provider '{provider}'. Choose from: {supported}"
        )
