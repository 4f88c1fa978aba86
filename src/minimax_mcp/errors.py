"""Error types and retry classification.

``classify`` is the single place that decides whether a failed tool
invocation is retried, answered with remediation guidance, or propagated.
"""

from dataclasses import dataclass
from enum import Enum

from minimax_mcp.const import VERIFICATION_URL


class ErrorKind(str, Enum):
    """Irreversible account-level conditions reported by the API."""

    VERIFICATION_REQUIRED = "verification_required"


class Outcome(str, Enum):
    RETRYABLE = "retryable"
    TERMINAL = "terminal"
    FATAL = "fatal"


# Message fragments that identify each terminal condition
TERMINAL_MARKERS: dict[ErrorKind, tuple[str, ...]] = {
    ErrorKind.VERIFICATION_REQUIRED: (
        "voice clone user forbidden",
        "should complete real-name verification",
    ),
}


class MinimaxError(Exception):
    """Base class for errors raised by the MiniMax adapters."""

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        self.kind = kind


class MinimaxAPIError(MinimaxError):
    """The API answered with a non-zero status code or a non-2xx response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        trace_id: str | None = None,
        kind: ErrorKind | None = None,
    ):
        super().__init__(message, kind=kind)
        self.status_code = status_code
        self.trace_id = trace_id


class MinimaxAuthError(MinimaxAPIError):
    """The API key was rejected."""


class MinimaxRequestError(MinimaxError):
    """A request could not be built or a response could not be used."""


class MinimaxTimeoutError(MinimaxError):
    """An asynchronous job did not finish in time."""


class ConfigurationError(Exception):
    """Mandatory configuration is missing at the point of use."""


class InvariantViolation(Exception):
    """Internal programming error. Never retried, never softened."""


@dataclass(frozen=True)
class Classification:
    outcome: Outcome
    kind: ErrorKind | None = None

    @property
    def retryable(self) -> bool:
        return self.outcome is Outcome.RETRYABLE


def match_terminal_kind(message: str) -> ErrorKind | None:
    """Return the terminal kind whose marker appears in ``message``."""
    for kind, markers in TERMINAL_MARKERS.items():
        if any(marker in message for marker in markers):
            return kind
    return None


def classify(error: BaseException) -> Classification:
    if isinstance(error, InvariantViolation):
        return Classification(Outcome.FATAL)

    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return Classification(Outcome.TERMINAL, kind)

    kind = match_terminal_kind(str(error))
    if kind is not None:
        return Classification(Outcome.TERMINAL, kind)

    return Classification(Outcome.RETRYABLE)


REMEDIATION: dict[ErrorKind, str] = {
    ErrorKind.VERIFICATION_REQUIRED: (
        "Voice cloning failed: Real-name verification required. "
        "To use voice cloning feature, please:\n\n"
        f"1. Visit MiniMax platform ({VERIFICATION_URL})\n"
        "2. Complete the real-name verification process\n"
        "3. Try again after verification is complete\n\n"
        "This requirement is for security and compliance purposes."
    ),
}


def remediation_for(kind: ErrorKind) -> str:
    return REMEDIATION[kind]
