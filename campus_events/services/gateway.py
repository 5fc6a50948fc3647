"""Completion gateway wrapping the OpenAI chat completions API."""

from __future__ import annotations

import logging
from typing import Optional

import openai
from openai import OpenAI as _OpenAIClient

from ..clients.openai_client import get_openai
from ..config import OPENAI_CHAT_MODEL, OPENAI_TEMPERATURE, OPENAI_TIMEOUT_SECONDS
from ..errors import GatewayTimeout, GatewayUnavailable
from .assembler import PromptPayload

logger = logging.getLogger(__name__)


class CompletionGateway:
    """Turns a :class:`PromptPayload` into model text.

    Build one per process (see :func:`build_gateway`) and pass it to the
    assistant; the instance holds no per-request state.
    """

    def __init__(
        self,
        client: _OpenAIClient,
        model: str = OPENAI_CHAT_MODEL,
        timeout: float = OPENAI_TIMEOUT_SECONDS,
        temperature: float = OPENAI_TEMPERATURE,
    ) -> None:
        self._client = client
        self.model = model
        self.timeout = timeout
        self.temperature = temperature

    def complete(self, payload: PromptPayload) -> str:
        """Return the completion text for *payload*.

        Raises
        ------
        GatewayTimeout
            The request exceeded ``timeout`` seconds.
        GatewayUnavailable
            Any other API failure, or an empty completion.
        """
        logger.info(
            "Requesting completion from %s (%d messages, %d events)",
            self.model,
            len(payload.messages),
            len(payload.events),
        )
        try:
            resp = self._client.chat.completions.create(
                model=self.model,
                messages=payload.messages,
                temperature=self.temperature,
                timeout=self.timeout,
            )
        except openai.APITimeoutError as exc:
            raise GatewayTimeout("Completion request timed out", exc, model=self.model) from exc
        except openai.OpenAIError as exc:
            raise GatewayUnavailable("Completion request failed", exc, model=self.model) from exc

        content: Optional[str] = resp.choices[0].message.content if resp.choices else None
        if not content:
            raise GatewayUnavailable("Completion returned no content", model=self.model)
        return content


def build_gateway(client: Optional[_OpenAIClient] = None) -> CompletionGateway:
    """Construct the process-wide gateway from configuration."""
    return CompletionGateway(client or get_openai())

__all__ = ["CompletionGateway", "build_gateway"]
