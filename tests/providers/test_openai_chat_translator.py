import pytest

from agentgate.models.provider import OPENAI_CHAT_URL
from agentgate.providers.base import TRAILING_USER_PROMPT, Conversation, Turn
from agentgate.providers.openai_chat import translate_openai_chat


def test_basic_payload_matches_staged_conversation():
    conv = Conversation(model="gpt-x", turns=[Turn("user", "hello")])
    request = translate_openai_chat(conv)
    assert request.url == OPENAI_CHAT_URL
    assert request.body["model"] == "gpt-x"
    assert request.body["messages"] == [{"role": "user", "content": "hello"}]
    assert request.body["temperature"] == 0.2
    assert request.body["top_p"] == 0.1


def test_system_message_leads_for_ordinary_models():
    conv = Conversation(
        model="gpt-4o",
        system_instruction="You are helpful.",
        temperature=0.9,
        top_p=0.5,
        turns=[Turn("user", "hi")],
    )
    body = translate_openai_chat(conv).body
    assert body["messages"][0] == {"role": "system", "content": "You are helpful."}
    assert body["temperature"] == 0.9
    assert body["top_p"] == 0.5


@pytest.mark.parametrize("model", ["o1", "o1-mini", "o3-mini", "o4-mini"])
def test_reasoning_models_fold_instruction_into_last_message(model):
    conv = Conversation(
        model=model,
        system_instruction="Think carefully.",
        temperature=0.5,
        turns=[Turn("user", "first"), Turn("assistant", "ok"), Turn("user", "second")],
    )
    body = translate_openai_chat(conv).body
    assert all(m["role"] != "system" for m in body["messages"])
    assert body["messages"][-1]["content"] == "Think carefully.\nsecond"
    assert body["messages"][0]["content"] == "first"
    assert "temperature" not in body
    assert "top_p" not in body


def test_reasoning_instruction_applied_after_trailing_turn_rule():
    conv = Conversation(
        model="o3",
        system_instruction="Rules.",
        turns=[Turn("user", "q"), Turn("model", "a")],
    )
    messages = translate_openai_chat(conv).body["messages"]
    assert messages[-1] == {"role": "user", "content": f"Rules.\n{TRAILING_USER_PROMPT}"}


@pytest.mark.parametrize("model", ["gpt-5", "gpt-5-mini", "gpt-5-nano"])
def test_fixed_sampling_family_omits_sampling(model):
    conv = Conversation(
        model=model, system_instruction="x", temperature=0.3, turns=[Turn("user", "hi")]
    )
    body = translate_openai_chat(conv).body
    assert body["messages"][0]["role"] == "system"
    assert "temperature" not in body
    assert "top_p" not in body
