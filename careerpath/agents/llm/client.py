from careerpath.settings import Settings, settings as default_settings
from careerpath.agents.errors import ConfigurationError
from careerpath.agents.invoker import ProviderRegistry, ResilientInvoker
from careerpath.agents.llm.base import LLMClient
from careerpath.agents.llm.openai_compat import OpenAICompatibleClient
from careerpath.agents.llm.openrouter import OpenRouterClient


def get_llm_client(settings: Settings = default_settings) -> LLMClient:
    if settings.LLM_PROVIDER == "openai":
        if not settings.OPENAI_API_KEY:
            raise ConfigurationError("Missing OPENAI_API_KEY")
        return OpenAICompatibleClient(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
        )

    if not settings.OPENROUTER_API_KEY:
        raise ConfigurationError("Missing OpenRouter API Key")
    return OpenRouterClient(
        api_key=settings.OPENROUTER_API_KEY,
        base_url=settings.OPENROUTER_BASE_URL,
        referer=settings.HTTP_REFERER,
        title=settings.APP_TITLE,
    )


def get_provider_registry(settings: Settings = default_settings) -> ProviderRegistry:
    models = settings.OPENAI_MODELS if settings.LLM_PROVIDER == "openai" else settings.OPENROUTER_MODELS
    return ProviderRegistry(
        models=tuple(models),
        timeout_tiers=tuple(settings.LLM_TIMEOUT_TIERS),
        max_retries=settings.LLM_MAX_RETRIES,
        retry_delay=settings.LLM_RETRY_DELAY,
    )


def get_invoker() -> ResilientInvoker:
    """FastAPI dependency: a fresh invoker per request."""
    return ResilientInvoker(get_llm_client(), get_provider_registry())
