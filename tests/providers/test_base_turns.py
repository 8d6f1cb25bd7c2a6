from agentgate.providers.base import (
    PROJECT_BEFORE_PROMPT,
    PROJECT_NO_INPUT,
    PROJECT_OPENING,
    TRAILING_USER_PROMPT,
    Conversation,
    FileSnippet,
    Turn,
    ensure_trailing_user_turn,
    project_turns,
)


def test_trailing_turn_added_to_empty_sequence():
    turns = ensure_trailing_user_turn([])
    assert turns == [Turn("user", TRAILING_USER_PROMPT)]


def test_trailing_turn_added_after_assistant_or_model():
    for role in ("assistant", "model"):
        turns = ensure_trailing_user_turn([Turn("user", "hi"), Turn(role, "hello")])
        assert len(turns) == 3
        assert turns[-1] == Turn("user", TRAILING_USER_PROMPT)


def test_trailing_turn_not_added_when_last_is_user():
    turns = [Turn("assistant", "hello"), Turn("user", "hi")]
    assert ensure_trailing_user_turn(turns) == turns


def test_trailing_turn_is_idempotent():
    once = ensure_trailing_user_turn([Turn("assistant", "x")])
    assert ensure_trailing_user_turn(once) == once


def test_plain_conversation_turns_pass_through():
    conv = Conversation(model="m", turns=[Turn("user", "a"), Turn("model", "b")])
    assert project_turns(conv) == conv.turns


def test_project_turns_with_files_and_prompt():
    conv = Conversation(
        model="m",
        turns=[Turn("user", "Refactor it")],
        files=[FileSnippet("src/a.py", "print(1)")],
        project=True,
    )
    turns = project_turns(conv)
    assert turns[0] == Turn("user", PROJECT_OPENING)
    assert turns[1] == Turn("assistant", "Please provide the content of the `src/a.py` file.")
    assert turns[2] == Turn(
        "user", "Here is the content of the `src/a.py` file:\n```\nprint(1)\n```\n"
    )
    assert turns[3] == Turn("assistant", PROJECT_BEFORE_PROMPT)
    assert turns[4] == Turn("user", "Refactor it")


def test_project_turns_without_files_or_prompt():
    conv = Conversation(model="m", project=True)
    turns = project_turns(conv)
    assert turns == [Turn("user", PROJECT_OPENING), Turn("assistant", PROJECT_NO_INPUT)]
    assert ensure_trailing_user_turn(turns)[-1] == Turn("user", TRAILING_USER_PROMPT)


def test_project_turns_files_without_prompt_end_on_user():
    conv = Conversation(model="m", files=[FileSnippet("a.txt", "x")], project=True)
    turns = project_turns(conv)
    assert turns[-1].role == "user"
    assert PROJECT_NO_INPUT not in [t.content for t in turns]
