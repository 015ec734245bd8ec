## Base LLM Client Interface
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Message = Dict[str, str]


def extract_content(data: Dict[str, Any]) -> Optional[str]:
    """Pull choices[0].message.content out of an OpenAI-style response body."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


class LLMClient(ABC):
    """
    One chat-completions backend. Implementations translate transport failures
    into the ProviderError family so the invoker can decide what to retry:
    429 -> RateLimitedError, everything else -> another ProviderError subclass.
    """

    @abstractmethod
    def complete(self, *, model: str, messages: List[Message], temperature: float,
    timeout: float, response_format: Optional[Dict[str, Any]] = None) -> str:
        raise NotImplementedError
