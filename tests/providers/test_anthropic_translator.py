from agentgate.models.provider import ANTHROPIC_MESSAGES_URL
from agentgate.providers.anthropic import translate_anthropic
from agentgate.providers.base import TRAILING_USER_PROMPT, Conversation, FileSnippet, Turn
from agentgate.settings import settings


def test_instruction_goes_to_top_level_system():
    conv = Conversation(
        model="claude-3-5-haiku",
        system_instruction="Be terse.",
        turns=[Turn("user", "hello")],
    )
    request = translate_anthropic(conv)
    assert request.url == ANTHROPIC_MESSAGES_URL
    assert request.body["system"] == "Be terse."
    assert request.body["messages"] == [{"role": "user", "content": "hello"}]
    assert request.body["max_tokens"] == settings.anthropic_max_tokens
    assert all(m["role"] != "system" for m in request.body["messages"])
    assert "temperature" not in request.body
    assert "top_p" not in request.body


def test_empty_instruction_omits_system():
    request = translate_anthropic(Conversation(model="claude-3", turns=[Turn("user", "hi")]))
    assert "system" not in request.body


def test_model_role_normalized_and_trailing_turn_added():
    conv = Conversation(model="claude-3", turns=[Turn("user", "hi"), Turn("model", "hey")])
    messages = translate_anthropic(conv).body["messages"]
    assert [m["role"] for m in messages] == ["user", "assistant", "user"]
    assert messages[-1]["content"] == TRAILING_USER_PROMPT


def test_extended_context_header_selected_by_model_prefix():
    conv = Conversation(model="claude-sonnet-4-5", turns=[Turn("user", "hi")])
    plain = Conversation(model="claude-opus-4", turns=[Turn("user", "hi")])

    beta = translate_anthropic(conv)
    other = translate_anthropic(plain)

    assert beta.headers == {"anthropic-beta": "context-1m-2025-08-07"}
    assert other.headers == {}
    # Body shape does not depend on the header.
    assert set(beta.body) == set(other.body)


def test_project_conversation_uses_project_token_budget():
    conv = Conversation(
        model="claude-3",
        files=[FileSnippet("a.py", "x = 1")],
        turns=[Turn("user", "explain")],
        project=True,
    )
    body = translate_anthropic(conv).body
    assert body["max_tokens"] == settings.anthropic_project_max_tokens
    assert body["messages"][0]["content"] == "I need your help on this project."
