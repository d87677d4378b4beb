#!/usr/bin/env python3
"""
Example demonstrating logging in SceneMachine.

This example shows what each log level reports:
- DEBUG: Scene transitions, filter decisions and session load/save
- INFO: Scene registration
- ERROR: Exceptions raised by entry/exit hooks (they still propagate)
"""

import logging

from scenemachine import Composer, Context, SceneRegistry, SessionMiddleware, hydrate_scene


def setup_logging():
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def broken_entry(ctx):
    raise RuntimeError("Intentional error for logging demonstration")


async def transitions(ctx, next_):
    command = ctx.payload["text"]
    if command == "/enter":
        await ctx.scene.enter("checkout")
    elif command == "/exit":
        await ctx.scene.exit()
    elif command == "/broken":
        await ctx.scene.enter("broken")
    else:
        await next_()


def create_app() -> Composer:
    registry = SceneRegistry()
    checkout, _ = registry.register("checkout")
    registry.register("broken", on_entry=broken_entry)

    app: Composer = Composer()
    app.use(SessionMiddleware())
    app.use(hydrate_scene(registry))
    app.use(checkout)
    app.use(transitions)
    return app


if __name__ == "__main__":
    setup_logging()

    app = create_app()

    print("=== SceneMachine Logging Example ===\n")

    print("1. Entering a scene - shows DEBUG transition logs:")
    app.run_sync(Context(payload={"chat_id": 1, "text": "/enter"}))

    print("\n2. Leaving it twice - the second exit is a logged no-op:")
    app.run_sync(Context(payload={"chat_id": 1, "text": "/exit"}))
    app.run_sync(Context(payload={"chat_id": 1, "text": "/exit"}))

    print("\n3. Failing entry hook - shows ERROR log, then the error propagates:")
    try:
        app.run_sync(Context(payload={"chat_id": 1, "text": "/broken"}))
    except RuntimeError as e:
        print(f"   Caught: {e}")

    print("\n=== End of Logging Example ===")
