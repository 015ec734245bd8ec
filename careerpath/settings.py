## Application settings configuration

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "dev"
    LOG_LEVEL: str = "INFO"

    # "openrouter" (httpx) or "openai" (any OpenAI-compatible endpoint, e.g. Groq)
    LLM_PROVIDER: str = "openrouter"

    # OpenRouter settings
    OPENROUTER_API_KEY: str = ""
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_MODELS: list[str] = [
        "moonshotai/kimi-k2:free",
        "deepseek/deepseek-chat-v3-0324:free",
        "meta-llama/llama-3.3-70b-instruct:free",
    ]
    HTTP_REFERER: str = "https://plan.goprsu.com"
    APP_TITLE: str = "CareerBuilder AI"

    # OpenAI-compatible settings
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.groq.com/openai/v1"
    OPENAI_MODELS: list[str] = ["llama-3.3-70b-versatile", "llama-3.1-8b-instant"]

    # Invoker behaviour
    LLM_TIMEOUT_TIERS: list[float] = [30.0, 45.0, 60.0]
    LLM_MAX_RETRIES: int = 1
    LLM_RETRY_DELAY: float = 1.0

    DEFAULT_TEMPERATURE: float = 0.7
    CONVERSION_TEMPERATURE: float = 0.3

    # Skip the outbound call for obviously vague goals
    VAGUE_GOAL_PREFILTER: bool = False


settings = Settings()
