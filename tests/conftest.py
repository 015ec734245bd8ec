"""Pytest configuration and shared fakes."""
from __future__ import annotations

import json
from typing import Any, Callable

import pytest

from careerpath.agents.errors import ProviderStatusError, ProviderTimeoutError, RateLimitedError
from careerpath.agents.invoker import ProviderRegistry, ResilientInvoker
from careerpath.agents.llm.base import LLMClient


class ScriptedClient(LLMClient):
    """
    Fake backend. ``script`` maps a model name to a list of outcomes consumed in
    order; an outcome is a str (success), an exception instance (raised), or a
    callable taking the messages and returning either.
    """

    def __init__(self, script: dict[str, list[Any]]):
        self.script = {model: list(outcomes) for model, outcomes in script.items()}
        self.calls: list[dict[str, Any]] = []

    def complete(self, *, model, messages, temperature, timeout, response_format=None) -> str:
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "timeout": timeout,
                "response_format": response_format,
            }
        )
        outcomes = self.script.get(model) or []
        if not outcomes:
            raise ProviderStatusError(500, f"no scripted outcome for {model}")
        outcome = outcomes.pop(0)
        if callable(outcome) and not isinstance(outcome, Exception):
            outcome = outcome(messages)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def models_called(self) -> list[str]:
        return [c["model"] for c in self.calls]


def rate_limited() -> RateLimitedError:
    return RateLimitedError("rate limited")


def server_error(status: int = 503) -> ProviderStatusError:
    return ProviderStatusError(status, "upstream unavailable")


def timed_out() -> ProviderTimeoutError:
    return ProviderTimeoutError("timed out")


def milestones_json(count: int = 5, start_year: int = 2026) -> str:
    return json.dumps(
        [
            {
                "title": f"Milestone {i + 1}",
                "year": start_year + i // 2,
                "description": f"Complete step {i + 1} of the plan.",
            }
            for i in range(count)
        ]
    )


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry(
        models=("model-a", "model-b", "model-c"),
        timeout_tiers=(30.0, 45.0, 60.0),
        max_retries=1,
        retry_delay=0.0,
    )


@pytest.fixture
def make_invoker(registry) -> Callable[[ScriptedClient], ResilientInvoker]:
    def _make(client: ScriptedClient) -> ResilientInvoker:
        return ResilientInvoker(client, registry, sleep=lambda _: None)

    return _make
