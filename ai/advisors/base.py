"""
POS AI Advisors — Base Advisor Protocol
==========================================
Advisors wrap an external AI service as a black-box callable.
They read plain data from the analysis read model and return an
explicit tagged result: a typed advisory or AdvisoryUnavailable.

Advisors NEVER raise on client failure, NEVER mutate state and are
NEVER consulted by the checkout.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger("pos.ai")


# ══════════════════════════════════════════════════════════════
# CLIENT PROTOCOL
# ══════════════════════════════════════════════════════════════

class AdvisoryClient(Protocol):
    """
    The external AI service, reduced to prompt in → response out.

    Forecast clients are expected to return JSON (text or an already
    decoded mapping); narrative clients return plain text.
    """

    def __call__(self, prompt: str) -> Any:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# UNAVAILABLE VARIANT
# ══════════════════════════════════════════════════════════════

class UnavailableReason(Enum):
    NO_CLIENT = "NO_CLIENT"               # service not configured
    CLIENT_ERROR = "CLIENT_ERROR"         # call raised
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    NO_DATA = "NO_DATA"                   # nothing to analyze


@dataclass(frozen=True)
class AdvisoryUnavailable:
    """The 'analysis unavailable' informational state."""
    advisor: str
    reason: UnavailableReason
    detail: str = ""

    available = False

    @property
    def message(self) -> str:
        base = f"{self.advisor} analysis unavailable ({self.reason.value})"
        return f"{base}: {self.detail}" if self.detail else base


# ══════════════════════════════════════════════════════════════
# ADVISOR BASE
# ══════════════════════════════════════════════════════════════

class Advisor(ABC):
    """
    Base class for advisors.

    Subclasses build a prompt and parse the response; the base class
    owns the failure boundary around the client call.
    """

    def __init__(self, client: Optional[AdvisoryClient] = None):
        self._client = client

    @property
    @abstractmethod
    def advisor_name(self) -> str:
        ...

    def unavailable(self, reason: UnavailableReason, detail: str = "") -> AdvisoryUnavailable:
        result = AdvisoryUnavailable(advisor=self.advisor_name, reason=reason, detail=detail)
        logger.warning(result.message)
        return result

    def _ask(self, prompt: str, parse: Callable[[Any], Any]):
        """
        Call the client and parse its response.

        Returns whatever `parse` returns, or AdvisoryUnavailable when
        there is no client, the call fails, or the response cannot be parsed.
        """
        if self._client is None:
            return self.unavailable(UnavailableReason.NO_CLIENT, "no AI client configured")

        try:
            raw = self._client(prompt)
        except Exception as exc:
            logger.warning(
                f"{self.advisor_name} client call failed: {exc}", exc_info=True,
            )
            return self.unavailable(UnavailableReason.CLIENT_ERROR, str(exc))

        try:
            return parse(raw)
        except (ValueError, TypeError, OverflowError, RecursionError) as exc:
            return self.unavailable(UnavailableReason.MALFORMED_RESPONSE, str(exc))
