import pytest

from agentgate.models.provider import ProviderKind
from agentgate.providers.responses import (
    DISABLED_TEXT,
    disabled_response,
    error_response,
    is_disabled_model,
)


def test_disabled_sentinel_detection():
    assert is_disabled_model("disabled")
    assert is_disabled_model(" Disabled ")
    assert not is_disabled_model("gpt-4o")
    assert not is_disabled_model(None)


def test_disabled_shapes():
    openai = disabled_response(ProviderKind.OPENAI)
    assert openai["id"] == "model-disabled"
    assert openai["choices"][0]["message"]["content"] == DISABLED_TEXT
    assert openai["choices"][0]["finish_reason"] == "stop"

    anthropic = disabled_response(ProviderKind.ANTHROPIC)
    assert anthropic["id"] == "msg_disabled"
    assert anthropic["content"][0]["text"] == DISABLED_TEXT
    assert anthropic["stop_reason"] == "end_turn"

    gemini = disabled_response(ProviderKind.GEMINI)
    candidate = gemini["candidates"][0]
    assert candidate["content"]["parts"][0]["text"] == DISABLED_TEXT
    assert candidate["finishReason"] == "STOP"
    assert len(candidate["safetyRatings"]) == 4

    responses = disabled_response(ProviderKind.OPENAI_RESPONSES)
    assert responses["status"] == "completed"
    assert responses["output_text"] == DISABLED_TEXT


@pytest.mark.parametrize(
    "kind, text_path, reason_path, reason",
    [
        (ProviderKind.OPENAI, ("choices", 0, "message", "content"), ("choices", 0, "finish_reason"), "error"),
        (ProviderKind.GITHUB, ("choices", 0, "message", "content"), ("choices", 0, "finish_reason"), "error"),
        (ProviderKind.ANTHROPIC, ("content", 0, "text"), ("stop_reason",), "error"),
        (ProviderKind.GEMINI, ("candidates", 0, "content", "parts", 0, "text"), ("candidates", 0, "finishReason"), "ERROR"),
        (ProviderKind.OPENAI_RESPONSES, ("output_text",), ("status",), "failed"),
    ],
)
def test_error_shapes(kind, text_path, reason_path, reason):
    payload = error_response(kind, "boom")

    def dig(path):
        value = payload
        for step in path:
            value = value[step]
        return value

    assert dig(text_path).endswith("API Error: boom")
    assert dig(reason_path) == reason


def test_error_labels():
    assert error_response(ProviderKind.GEMINI, "x")["candidates"][0]["content"]["parts"][0][
        "text"
    ] == "GoogleAI API Error: x"
    assert error_response(ProviderKind.ANTHROPIC, "x")["content"][0]["text"] == (
        "Anthropic API Error: x"
    )
