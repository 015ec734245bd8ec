"""
Resilient provider invoker.

One logical call is delivered to the first model in an ordered list that
answers successfully:

- each model gets ``max_retries + 1`` attempts, attempt ``i`` using
  ``timeout_tiers[min(i, len - 1)]``
- a rate-limited model is abandoned immediately (no local retry)
- any other provider failure is retried on the same model, then escalated
- when every model fails, ProviderExhaustedError carries all attempt errors
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from careerpath.agents.errors import (
    ProviderAttemptError,
    ProviderError,
    ProviderExhaustedError,
    RateLimitedError,
)
from careerpath.agents.llm.base import LLMClient, Message

logger = logging.getLogger(__name__)

MAX_RETRY_DELAY = 5.0


@dataclass(frozen=True)
class ProviderRegistry:
    models: Sequence[str]
    timeout_tiers: Sequence[float] = (30.0, 45.0, 60.0)
    max_retries: int = 1
    retry_delay: float = 1.0

    def __post_init__(self):
        if not self.models:
            raise ValueError("ProviderRegistry needs at least one model")
        if not self.timeout_tiers:
            raise ValueError("ProviderRegistry needs at least one timeout tier")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")

    def timeout_for(self, attempt: int) -> float:
        return self.timeout_tiers[min(attempt, len(self.timeout_tiers) - 1)]

    def delay_for(self, attempt: int) -> float:
        return min(self.retry_delay * (2 ** attempt), MAX_RETRY_DELAY)


class ResilientInvoker:
    def __init__(self, client: LLMClient, registry: ProviderRegistry,
    sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.registry = registry
        self.sleep = sleep

    def invoke(self, messages: List[Message], *, temperature: float,
    response_format: Optional[Dict[str, Any]] = None, request_id: str | None = None) -> str:
        attempts: List[ProviderAttemptError] = []
        budget = self.registry.max_retries + 1

        for model in self.registry.models:
            for attempt in range(budget):
                timeout = self.registry.timeout_for(attempt)
                logger.info(
                    "request_id=%s model=%s attempt=%d/%d timeout=%.0fs calling provider",
                    request_id, model, attempt + 1, budget, timeout,
                )
                try:
                    text = self.client.complete(
                        model=model,
                        messages=messages,
                        temperature=temperature,
                        timeout=timeout,
                        response_format=response_format,
                    )
                except RateLimitedError as e:
                    attempts.append(ProviderAttemptError(model, attempt, str(e)))
                    logger.warning("request_id=%s model=%s rate limited, skipping model", request_id, model)
                    break
                except ProviderError as e:
                    attempts.append(ProviderAttemptError(model, attempt, str(e)))
                    logger.warning(
                        "request_id=%s model=%s attempt=%d failed: %s: %s",
                        request_id, model, attempt + 1, type(e).__name__, e,
                    )
                    if attempt + 1 < budget:
                        self.sleep(self.registry.delay_for(attempt))
                    continue

                logger.info("request_id=%s model=%s succeeded chars=%d", request_id, model, len(text))
                return text

            logger.info("request_id=%s switching model after failures: %s", request_id, model)

        logger.error("request_id=%s all %d models exhausted", request_id, len(self.registry.models))
        raise ProviderExhaustedError(attempts)
