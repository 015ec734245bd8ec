## Error taxonomy for the generation core
from dataclasses import dataclass


class ConfigurationError(RuntimeError):
    """Required server configuration (e.g. an API key) is missing."""


class RequestShapeError(ValueError):
    """The request body matches neither accepted shape."""


# -------------------------
# Provider errors
# -------------------------
class ProviderError(RuntimeError):
    """A single backend call failed. Retryable on the same model."""


class RateLimitedError(ProviderError):
    """Backend answered 429; the invoker moves on to the next model."""


class ProviderStatusError(ProviderError):
    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Provider returned status {status_code}: {body[:200]}")


class ProviderTimeoutError(ProviderError):
    pass


class ProviderTransportError(ProviderError):
    pass


class EmptyResponseError(ProviderError):
    pass


@dataclass
class ProviderAttemptError:
    model: str
    attempt_index: int
    cause: str


class ProviderExhaustedError(RuntimeError):
    """Every configured model failed for one logical call."""

    def __init__(self, attempts: list[ProviderAttemptError]):
        self.attempts = attempts
        last = self.last_error
        message = last.cause if last else "No models configured"
        super().__init__(message)

    @property
    def last_error(self) -> ProviderAttemptError | None:
        return self.attempts[-1] if self.attempts else None


# -------------------------
# Pipeline errors
# -------------------------
class StageFailedError(RuntimeError):
    def __init__(self, stage: str, request_id: str | None, cause: Exception):
        self.stage = stage
        self.request_id = request_id
        self.cause = cause
        super().__init__(f"{stage} stage failed (request_id={request_id}): {cause}")


class RoadmapValidationError(ValueError):
    """Conversion output is not a well-typed list of milestones."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        super().__init__(message)
