import httpx

from careerpath.agents.errors import (
    EmptyResponseError,
    ProviderStatusError,
    ProviderTimeoutError,
    ProviderTransportError,
    RateLimitedError,
)
from careerpath.agents.llm.base import LLMClient, extract_content


class OpenRouterClient(LLMClient):
    def __init__(self, *, api_key: str, base_url: str, referer: str = "", title: str = "",
    transport: httpx.BaseTransport | None = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.referer = referer
        self.title = title
        # injectable for tests (httpx.MockTransport)
        self.transport = transport

    def complete(self, *, model, messages, temperature, timeout, response_format=None) -> str:
        # POST {base_url}/chat/completions with OpenAI message format
        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if response_format:
            payload["response_format"] = response_format

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        # OpenRouter uses these for app attribution
        if self.referer:
            headers["HTTP-Referer"] = self.referer
        if self.title:
            headers["X-Title"] = self.title

        try:
            with httpx.Client(timeout=timeout, transport=self.transport) as client:
                r = client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"{model} timed out after {timeout}s") from e
        except httpx.RequestError as e:
            # transport failures, undecodable bodies, redirect loops
            raise ProviderTransportError(f"{model} transport error: {e}") from e

        if r.status_code == 429:
            raise RateLimitedError(f"{model} rate limited: {r.text[:200]}")
        if r.status_code < 200 or r.status_code >= 300:
            raise ProviderStatusError(r.status_code, r.text)

        try:
            data = r.json()
        except ValueError as e:
            raise EmptyResponseError(f"{model} returned a non-JSON body") from e

        content = extract_content(data)
        if not content or not content.strip():
            raise EmptyResponseError(f"{model} returned empty content")
        return content.strip()
