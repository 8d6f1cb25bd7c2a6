from agentgate.models.provider import OPENAI_RESPONSES_URL
from agentgate.providers.base import Conversation, FileSnippet, Turn
from agentgate.providers.openai_responses import NO_FILES_MARKER, translate_openai_responses
from agentgate.settings import settings


def test_project_input_lists_files_then_prompt():
    conv = Conversation(
        model="gpt-4.1",
        system_instruction="Review code.",
        files=[FileSnippet("a.py", "x = 1"), FileSnippet("b.py", "y = 2")],
        turns=[Turn("user", "  What is wrong?  ")],
        project=True,
    )
    request = translate_openai_responses(conv)
    body = request.body

    assert request.url == OPENAI_RESPONSES_URL
    assert body["model"] == "gpt-4.1"
    assert body["instructions"] == "Review code."
    assert body["max_output_tokens"] == settings.openai_max_output_tokens
    assert body["input"].startswith("# Project Files\n\n## File: a.py\n\n```\nx = 1\n```")
    assert "## File: b.py" in body["input"]
    assert body["input"].index("a.py") < body["input"].index("b.py")
    assert body["input"].endswith("What is wrong?")


def test_missing_files_marker_and_no_instructions():
    conv = Conversation(model="gpt-4.1", turns=[Turn("user", "hi")])
    body = translate_openai_responses(conv).body
    assert NO_FILES_MARKER in body["input"]
    assert "instructions" not in body
    assert "# Conversation" not in body["input"]


def test_multi_turn_conversation_section():
    conv = Conversation(
        model="gpt-4.1",
        turns=[Turn("user", "one"), Turn("model", "two"), Turn("user", "three")],
    )
    text = translate_openai_responses(conv).body["input"]
    assert "# Conversation" in text
    assert "**user**: one" in text
    assert "**assistant**: two" in text
    assert text.endswith("three")
    assert "**user**: three" not in text
