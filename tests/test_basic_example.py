"""End-to-end tests driving the basic example bot."""

import pytest

from examples.basic_example import ChatContext, ChatSession, create_bot
from scenemachine import MemorySessionStorage, SessionConfig
from tests.framework import ChatDsl


@pytest.fixture
def chat():
    storage = MemorySessionStorage()
    bot = create_bot(SessionConfig(model=ChatSession, storage=storage))
    return ChatDsl(bot=bot, make_context=ChatContext, storage=storage)


class TestBasicExample:
    """Test the example bot conversation flows."""

    def test_echo_without_scene(self, chat):
        assert chat.send("hello") == ["stranger said: hello"]
        assert chat.scene_of() is None

    def test_signup_flow(self, chat):
        assert chat.send("/start") == ["What is your name?"]
        assert chat.scene_of() == "signup"

        assert chat.send("Alice") == ["Profile saved for Alice."]
        assert chat.scene_of() is None

        assert chat.send("hi") == ["Alice said: hi"]

    def test_feedback_scene_has_no_exit_hook(self, chat):
        replies = chat.conversation("/feedback", "Nice bot")

        assert replies == ["Tell us what you think.", "Thanks for the feedback!"]
        assert chat.stored_session()["feedback"] == ["Nice bot"]

    def test_cancel_suppresses_exit_hook(self, chat):
        chat.send("/start")

        assert chat.send("/cancel") == ["Cancelled."]
        assert chat.scene_of() is None
        assert chat.stored_session()["name"] is None

    def test_cancel_without_scene(self, chat):
        assert chat.send("/cancel") == ["Nothing to cancel."]

    def test_chats_have_separate_scenes(self, chat):
        chat.send("/start", chat_id=1)
        chat.send("/feedback", chat_id=2)

        assert chat.scene_of(1) == "signup"
        assert chat.scene_of(2) == "feedback"
        assert chat.send("Bob", chat_id=1) == ["Profile saved for Bob."]
        assert chat.send("Great", chat_id=2) == ["Thanks for the feedback!"]

    def test_scene_handlers_stop_the_chain(self, chat):
        """Inside a scene, commands are consumed by the scene handler."""
        chat.send("/start")

        assert chat.send("/feedback") == ["Profile saved for /feedback."]
        assert chat.last_context.session.scene is None
