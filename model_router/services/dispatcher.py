"""
Dispatcher for the selected model.

Maps a catalog model to an OpenAI-compatible client for its provider, sends the
prompt with a bounded window of recent messages (trimmed to fit the model's
context) and streams the completion back. Retries and fallback answers are
not handled here: failures surface as DispatchError for the caller to report.
"""

import logging
from dataclasses import dataclass
from typing import Any, AsyncGenerator, AsyncIterator, Dict, List, Mapping, Optional, Sequence

from openai import AsyncOpenAI, OpenAIError

from model_router.models.domain import Candidate
from model_router.services.cost import estimate_cost, estimate_tokens
from model_router.shared import Settings

log = logging.getLogger(__name__)


class DispatchError(Exception):
    """The selected model could not be called."""


def _estimate_input(messages: Sequence[Mapping[str, str]]) -> int:
    return estimate_tokens(" ".join(message["content"] for message in messages))


@dataclass(frozen=True)
class DispatchUsage:
    input_tokens: int
    output_tokens: int
    estimated: bool = False

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def cost_for(self, candidate: Candidate) -> float:
        return estimate_cost(candidate, self.input_tokens, self.output_tokens)


class CompletionStream:
    """Async iterator over completion text chunks; usage is known once exhausted."""

    def __init__(self, stream: Any, candidate: Candidate, messages: List[Dict[str, str]]):
        self._stream = stream
        self.candidate = candidate
        self.messages = messages
        self._parts: List[str] = []
        self._reported_usage: Any = None
        self._iterator: Optional[AsyncGenerator[str, None]] = None

    def __aiter__(self) -> AsyncIterator[str]:
        if self._iterator is None:
            self._iterator = self._iterate()
        return self._iterator

    async def aclose(self) -> None:
        """Stop iterating and release the provider stream."""
        if self._iterator is not None:
            await self._iterator.aclose()
        await self._stream.close()

    async def _iterate(self) -> AsyncGenerator[str, None]:
        try:
            async for chunk in self._stream:
                usage = getattr(chunk, "usage", None)
                if usage is not None:
                    self._reported_usage = usage
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    self._parts.append(content)
                    yield content
        except OpenAIError as e:
            raise DispatchError(f"Stream from '{self.candidate.id}' failed: {e}") from e

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def usage(self) -> DispatchUsage:
        """Provider-reported usage, or a character-based estimate when none was sent."""
        if self._reported_usage is not None:
            return DispatchUsage(
                input_tokens=self._reported_usage.prompt_tokens or 0,
                output_tokens=self._reported_usage.completion_tokens or 0,
            )
        return DispatchUsage(
            input_tokens=_estimate_input(self.messages),
            output_tokens=estimate_tokens(self.text),
            estimated=True,
        )


class Dispatcher:
    """
    Sends prompts to the selected model.

    Clients are keyed by lower-cased provider name. Providers without a
    dedicated client go through the fallback client (OpenRouter) when one is
    configured.
    """

    def __init__(
        self,
        clients: Mapping[str, AsyncOpenAI],
        fallback_client: Optional[AsyncOpenAI] = None,
        history_window: int = 10,
        max_output_tokens: int = 4000,
        temperature: float = 0.7,
    ):
        self._clients = {provider.lower(): client for provider, client in clients.items()}
        self._fallback_client = fallback_client
        self.history_window = history_window
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> "Dispatcher":
        """Create one client per provider that has an API key configured."""
        endpoints = {
            "openai": (settings.OPENAI_API_KEY, settings.OPENAI_API_BASE_URL),
            "anthropic": (settings.ANTHROPIC_API_KEY, settings.ANTHROPIC_API_BASE_URL),
            "google": (settings.GOOGLE_API_KEY, settings.GOOGLE_API_BASE_URL),
        }
        clients: Dict[str, AsyncOpenAI] = {}
        for provider, (api_key, base_url) in endpoints.items():
            if api_key is None:
                log.warning(f"No API key configured for provider '{provider}'.")
                continue
            clients[provider] = AsyncOpenAI(
                api_key=api_key.get_secret_value(),
                base_url=base_url,
                timeout=settings.DISPATCH_TIMEOUT_SECONDS,
            )
            log.info(f"Client for provider '{provider}' initialized ({base_url}).")

        fallback_client = None
        if settings.OPENROUTER_API_KEY is not None:
            fallback_client = AsyncOpenAI(
                api_key=settings.OPENROUTER_API_KEY.get_secret_value(),
                base_url=settings.OPENROUTER_API_BASE_URL,
                timeout=settings.DISPATCH_TIMEOUT_SECONDS,
            )
            log.info("OpenRouter fallback client initialized.")

        return cls(
            clients,
            fallback_client=fallback_client,
            history_window=settings.HISTORY_WINDOW,
            max_output_tokens=settings.MAX_OUTPUT_TOKENS,
            temperature=settings.DEFAULT_TEMPERATURE,
        )

    def client_for(self, candidate: Candidate) -> AsyncOpenAI:
        client = self._clients.get(candidate.provider.lower(), self._fallback_client)
        if client is None:
            raise DispatchError(f"No API client configured for provider '{candidate.provider}'.")
        return client

    def build_messages(
        self, prompt: str, history: Optional[Sequence[Mapping[str, str]]] = None
    ) -> List[Dict[str, str]]:
        """The most recent history_window messages followed by the prompt."""
        recent = list(history or [])
        recent = recent[-self.history_window:] if self.history_window > 0 else []
        messages = [{"role": m["role"], "content": m["content"]} for m in recent]
        messages.append({"role": "user", "content": prompt})
        return messages

    def fit_to_context(
        self, candidate: Candidate, messages: List[Dict[str, str]]
    ) -> List[Dict[str, str]]:
        """
        Drop the oldest history messages until the estimated input leaves at
        least one token of the candidate's context for output. The prompt
        (last message) is never dropped.
        """
        fitted = list(messages)
        while _estimate_input(fitted) >= candidate.max_tokens:
            if len(fitted) == 1:
                raise DispatchError(
                    f"Prompt of ~{_estimate_input(fitted)} tokens does not fit the "
                    f"{candidate.max_tokens}-token context of '{candidate.id}'."
                )
            fitted.pop(0)
        if len(fitted) < len(messages):
            log.info(
                f"Dropped {len(messages) - len(fitted)} history messages to fit "
                f"the context of '{candidate.id}'."
            )
        return fitted

    def output_limit(
        self,
        candidate: Candidate,
        messages: Sequence[Mapping[str, str]],
        max_tokens: Optional[int] = None,
    ) -> int:
        """The requested (or default) output limit, capped by the room left in the context."""
        room = max(1, candidate.max_tokens - _estimate_input(messages))
        return min(max_tokens or self.max_output_tokens, room)

    async def open_stream(
        self,
        candidate: Candidate,
        prompt: str,
        history: Optional[Sequence[Mapping[str, str]]] = None,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> CompletionStream:
        client = self.client_for(candidate)
        messages = self.fit_to_context(candidate, self.build_messages(prompt, history))
        limit = self.output_limit(candidate, messages, max_tokens)

        params: Dict[str, Any] = {
            "model": candidate.provider_model,
            "messages": messages,
            "temperature": self.temperature if temperature is None else temperature,
            "max_tokens": limit,
            "stream": True,
            "stream_options": {"include_usage": True},
        }
        if top_p is not None:
            params["top_p"] = top_p

        log.info(
            f"Streaming from {candidate.provider} model '{candidate.provider_model}' "
            f"with {len(messages)} messages, max_tokens={limit}"
        )
        try:
            stream = await client.chat.completions.create(**params)
        except OpenAIError as e:
            raise DispatchError(f"{candidate.provider} request for '{candidate.id}' failed: {e}") from e
        return CompletionStream(stream, candidate, messages)

    async def aclose(self) -> None:
        clients = list(self._clients.values())
        if self._fallback_client is not None:
            clients.append(self._fallback_client)
        for client in clients:
            await client.close()
