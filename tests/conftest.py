"""
Pytest configuration and shared fixtures.
"""

import pytest

from scenemachine import Context, SceneRegistry, SceneSessionData


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio only (trio is not installed)."""
    return "asyncio"


@pytest.fixture
def registry():
    return SceneRegistry()


@pytest.fixture
def ctx():
    """A context with a fresh session and no active scene."""
    return Context(payload={"chat_id": 1, "text": ""}, session=SceneSessionData())


class HookRecorder:
    """Callable recording each invocation and the scene visible at that moment."""

    def __init__(self, name="hook", fail_with=None):
        self.__name__ = name
        self.calls = []
        self.fail_with = fail_with

    def __call__(self, ctx):
        self.calls.append(ctx.session.scene)
        if self.fail_with is not None:
            raise self.fail_with

    @property
    def call_count(self):
        return len(self.calls)


class AsyncHookRecorder(HookRecorder):
    """Coroutine variant of HookRecorder."""

    async def __call__(self, ctx):
        super().__call__(ctx)


@pytest.fixture
def hook():
    return HookRecorder


@pytest.fixture
def async_hook():
    return AsyncHookRecorder
