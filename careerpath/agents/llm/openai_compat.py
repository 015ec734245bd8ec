import httpx
import openai
from openai import OpenAI

from careerpath.agents.errors import (
    EmptyResponseError,
    ProviderStatusError,
    ProviderTimeoutError,
    ProviderTransportError,
    RateLimitedError,
)
from careerpath.agents.llm.base import LLMClient


class OpenAICompatibleClient(LLMClient):
    def __init__(self, *, api_key: str, base_url: str, http_client: httpx.Client | None = None):
        # retries are owned by the invoker, not the SDK
        self.client = OpenAI(api_key=api_key, base_url=base_url, max_retries=0, http_client=http_client)

    def complete(self, *, model, messages, temperature, timeout, response_format=None) -> str:
        kwargs = {}
        if response_format:
            kwargs["response_format"] = response_format

        try:
            resp = self.client.with_options(timeout=timeout).chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,
                **kwargs,
            )
        except openai.RateLimitError as e:
            raise RateLimitedError(f"{model} rate limited: {e}") from e
        except openai.APITimeoutError as e:
            raise ProviderTimeoutError(f"{model} timed out after {timeout}s") from e
        except openai.APIConnectionError as e:
            raise ProviderTransportError(f"{model} transport error: {e}") from e
        except openai.APIStatusError as e:
            raise ProviderStatusError(e.status_code, str(e)) from e
        except openai.APIError as e:
            raise ProviderTransportError(f"{model} API error: {e}") from e

        if not resp.choices:
            raise EmptyResponseError(f"{model} returned no choices")
        content = resp.choices[0].message.content
        if not content or not content.strip():
            raise EmptyResponseError(f"{model} returned empty content")
        return content.strip()
