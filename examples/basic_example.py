"""
Basic usage example for SceneMachine.

This example demonstrates:
- Registering scenes with entry and exit hooks
- Attaching handlers that only run inside a scene
- Entering and leaving scenes from ordinary handlers
- Keeping application data next to the scene in a custom session model
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import Field

from scenemachine import (
    Composer,
    Context,
    SceneRegistry,
    SceneSessionData,
    SessionConfig,
    SessionMiddleware,
    hydrate_scene,
)


class ChatSession(SceneSessionData):
    name: Optional[str] = None
    feedback: List[str] = Field(default_factory=list)


@dataclass
class ChatContext(Context):
    replies: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.payload["text"]

    def reply(self, text: str) -> None:
        self.replies.append(text)


# Scene hooks
def ask_name(ctx: ChatContext):
    ctx.reply("What is your name?")


async def confirm_profile(ctx: ChatContext):
    ctx.reply(f"Profile saved for {ctx.session.name}.")


def ask_feedback(ctx: ChatContext):
    ctx.reply("Tell us what you think.")


# Scene handlers
async def save_name(ctx: ChatContext, next_):
    ctx.session.name = ctx.text
    await ctx.scene.exit()


async def save_feedback(ctx: ChatContext, next_):
    ctx.session.feedback.append(ctx.text)
    ctx.reply("Thanks for the feedback!")
    await ctx.scene.exit()


# Regular handlers
async def cancel(ctx: ChatContext, next_):
    if ctx.text != "/cancel":
        await next_()
        return
    if ctx.session.scene is None:
        ctx.reply("Nothing to cancel.")
    else:
        await ctx.scene.exit(suppress_exit=True)
        ctx.reply("Cancelled.")


async def commands(ctx: ChatContext, next_):
    if ctx.text == "/start":
        await ctx.scene.enter("signup")
    elif ctx.text == "/feedback":
        await ctx.scene.enter("feedback")
    else:
        await next_()


def echo(ctx: ChatContext, next_):
    name = ctx.session.name or "stranger"
    ctx.reply(f"{name} said: {ctx.text}")


def create_bot(config: Optional[SessionConfig] = None) -> Composer:
    """Build the bot pipeline."""
    registry = SceneRegistry()

    signup, signup_handlers = registry.register("signup", on_entry=ask_name, on_exit=confirm_profile)
    signup_handlers.use(save_name)

    feedback, feedback_handlers = registry.register("feedback", on_entry=ask_feedback)
    feedback_handlers.use(save_feedback)

    bot: Composer = Composer()
    bot.use(SessionMiddleware(config or SessionConfig(model=ChatSession)))
    bot.use(hydrate_scene(registry))
    bot.use(cancel)
    bot.use(signup)
    bot.use(feedback)
    bot.use(commands, echo)
    return bot


def send(bot: Composer, chat_id: int, text: str) -> List[str]:
    """Deliver one message to the bot and return its replies."""
    ctx = ChatContext(payload={"chat_id": chat_id, "text": text})
    bot.run_sync(ctx)
    return ctx.replies


def main():
    bot = create_bot()

    for text in ["hello", "/start", "Alice", "hello again", "/feedback", "Nice bot", "/feedback", "/cancel"]:
        print(f"> {text}")
        for reply in send(bot, 1, text):
            print(f"< {reply}")
        print()


if __name__ == "__main__":
    main()
