import asyncio

import pytest
from openai import OpenAIError

from conftest import FakeAsyncClient, text_chunk, usage_chunk
from model_router.services.cost import estimate_tokens
from model_router.services.dispatcher import Dispatcher, DispatchError
from model_router.shared import Settings


def collect(stream):
    async def _collect():
        return [chunk async for chunk in stream]
    return asyncio.run(_collect())


def open_and_collect(dispatcher, *args, **kwargs):
    async def _run():
        stream = await dispatcher.open_stream(*args, **kwargs)
        chunks = [chunk async for chunk in stream]
        return stream, chunks
    return asyncio.run(_run())


def history(count):
    return [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"message {i}"}
        for i in range(count)
    ]


def test_history_is_limited_to_recent_window():
    dispatcher = Dispatcher({}, history_window=4)

    messages = dispatcher.build_messages("latest", history(10))

    assert [m["content"] for m in messages] == [
        "message 6", "message 7", "message 8", "message 9", "latest",
    ]
    assert messages[-1]["role"] == "user"


def test_zero_window_sends_only_the_prompt():
    dispatcher = Dispatcher({}, history_window=0)
    assert dispatcher.build_messages("hi", history(3)) == [{"role": "user", "content": "hi"}]


def test_clients_are_matched_by_provider(make_candidate):
    openai_client = FakeAsyncClient()
    fallback = FakeAsyncClient()
    dispatcher = Dispatcher({"OpenAI": openai_client}, fallback_client=fallback)

    assert dispatcher.client_for(make_candidate(provider="OpenAI")) is openai_client
    assert dispatcher.client_for(make_candidate(provider="Meta")) is fallback


def test_missing_client_is_a_dispatch_error(make_candidate):
    dispatcher = Dispatcher({"openai": FakeAsyncClient()})
    with pytest.raises(DispatchError, match="Meta"):
        dispatcher.client_for(make_candidate(provider="Meta"))


def test_stream_yields_text_and_reported_usage(make_candidate):
    client = FakeAsyncClient([text_chunk("Hel"), text_chunk(None), text_chunk("lo"), usage_chunk(12, 3)])
    dispatcher = Dispatcher({"acme": client}, max_output_tokens=4000, temperature=0.5)
    candidate = make_candidate(backendModel="acme-large-v2", maxTokens=1024)

    stream, chunks = open_and_collect(dispatcher, candidate, "Say hello", history=history(2))

    assert chunks == ["Hel", "lo"]
    assert stream.text == "Hello"
    assert stream.usage.input_tokens == 12
    assert stream.usage.output_tokens == 3
    assert stream.usage.estimated is False

    params = client.calls[0]
    assert params["model"] == "acme-large-v2"
    # 1024-token context minus ~8 estimated input tokens
    assert params["max_tokens"] == 1016
    assert params["temperature"] == 0.5
    assert params["stream"] is True
    assert "top_p" not in params
    assert len(params["messages"]) == 3


def test_request_overrides_are_forwarded(make_candidate):
    client = FakeAsyncClient([text_chunk("ok")])
    dispatcher = Dispatcher({"acme": client})

    open_and_collect(dispatcher, make_candidate(), "hi", temperature=1.2, top_p=0.8, max_tokens=50)

    params = client.calls[0]
    assert params["temperature"] == 1.2
    assert params["top_p"] == 0.8
    assert params["max_tokens"] == 50


def test_usage_is_estimated_when_not_reported(make_candidate):
    client = FakeAsyncClient([text_chunk("a" * 10)])
    dispatcher = Dispatcher({"acme": client})

    stream, _ = open_and_collect(dispatcher, make_candidate(), "What is up?", history=history(1))

    usage = stream.usage
    assert usage.estimated is True
    assert usage.input_tokens == estimate_tokens("message 0 What is up?")
    assert usage.output_tokens == 3
    assert usage.cost_for(make_candidate()) == pytest.approx(
        (usage.input_tokens * 0.01 + 3 * 0.01) / 1000
    )


def test_request_failure_is_a_dispatch_error(make_candidate):
    dispatcher = Dispatcher({"acme": FakeAsyncClient(error=OpenAIError("boom"))})

    with pytest.raises(DispatchError, match="boom"):
        open_and_collect(dispatcher, make_candidate(), "hi")


def test_stream_failure_is_a_dispatch_error(make_candidate):
    client = FakeAsyncClient([text_chunk("partial")], stream_error=OpenAIError("connection reset"))
    dispatcher = Dispatcher({"acme": client})

    with pytest.raises(DispatchError, match="connection reset"):
        open_and_collect(dispatcher, make_candidate(), "hi")


def test_from_settings_creates_clients_only_for_configured_keys(make_candidate):
    settings = Settings(
        OPENAI_API_KEY="sk-test",
        ANTHROPIC_API_KEY=None,
        GOOGLE_API_KEY=None,
        OPENROUTER_API_KEY=None,
        HISTORY_WINDOW=3,
    )
    dispatcher = Dispatcher.from_settings(settings)

    assert dispatcher.history_window == 3
    assert dispatcher.client_for(make_candidate(provider="OpenAI")) is not None
    with pytest.raises(DispatchError):
        dispatcher.client_for(make_candidate(provider="Anthropic"))

    asyncio.run(dispatcher.aclose())


def test_aclose_closes_every_client():
    primary, fallback = FakeAsyncClient(), FakeAsyncClient()
    dispatcher = Dispatcher({"openai": primary}, fallback_client=fallback)

    asyncio.run(dispatcher.aclose())

    assert primary.closed and fallback.closed


def test_oldest_history_is_dropped_to_fit_the_context(make_candidate):
    client = FakeAsyncClient([text_chunk("ok")])
    dispatcher = Dispatcher({"acme": client})
    candidate = make_candidate(maxTokens=4096)
    long_history = [
        {"role": "user" if i % 2 == 0 else "assistant", "content": str(i) * 4000}
        for i in range(5)
    ]

    stream, _ = open_and_collect(dispatcher, candidate, "hello", history=long_history)

    params = client.calls[0]
    assert [m["content"][0] for m in params["messages"][:-1]] == ["1", "2", "3", "4"]
    input_tokens = estimate_tokens(" ".join(m["content"] for m in params["messages"]))
    assert input_tokens == 4003
    assert params["max_tokens"] == 4096 - input_tokens
    assert stream.usage.input_tokens + params["max_tokens"] <= candidate.max_tokens


def test_requested_output_is_kept_when_it_fits(make_candidate):
    client = FakeAsyncClient([text_chunk("ok")])
    dispatcher = Dispatcher({"acme": client})

    open_and_collect(dispatcher, make_candidate(maxTokens=4096), "hello", max_tokens=200)

    assert client.calls[0]["max_tokens"] == 200


def test_prompt_that_fills_the_context_is_a_dispatch_error(make_candidate):
    client = FakeAsyncClient([text_chunk("ok")])
    dispatcher = Dispatcher({"acme": client})

    with pytest.raises(DispatchError, match="does not fit"):
        open_and_collect(dispatcher, make_candidate(maxTokens=10), "x" * 40, history=history(2))
    assert client.calls == []


def test_aclose_releases_the_provider_stream(make_candidate):
    client = FakeAsyncClient([text_chunk("one"), text_chunk("two")])
    dispatcher = Dispatcher({"acme": client})

    async def _run():
        stream = await dispatcher.open_stream(make_candidate(), "hi")
        chunks = []
        async for chunk in stream:
            chunks.append(chunk)
            await stream.aclose()
        return chunks

    assert asyncio.run(_run()) == ["one"]
    assert client.streams[0].closed
