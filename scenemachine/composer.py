"""
Middleware composition for request pipelines.

A middleware is any callable taking ``(ctx, next_)``. It may be a plain
function or a coroutine function; ``next_()`` returns an awaitable that runs
the remainder of the chain. A :class:`Composer` is itself a middleware, so
composers nest to form a tree that is walked depth-first in registration
order.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, List, TypeVar, Union

import anyio

from .exceptions import PipelineError

logger = logging.getLogger(__name__)

C = TypeVar("C")

NextFunction = Callable[[], Awaitable[None]]
Middleware = Callable[[Any, NextFunction], Union[None, Awaitable[None]]]
Predicate = Callable[[Any], Union[bool, Awaitable[bool]]]


async def invoke(func: Callable, *args: Any) -> Any:
    """Call a sync or async callable and return its (awaited) result."""
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def _done() -> None:
    pass


class Composer(Generic[C]):
    """Ordered tree of middleware."""

    def __init__(self, *middleware: Middleware):
        self._handlers: List[Middleware] = list(middleware)

    def use(self, *middleware: Middleware) -> "Composer[C]":
        """Append middleware and return the composer holding them.

        Example::

            async def log_update(ctx, next_):
                print(ctx.payload)
                await next_()

            composer.use(log_update)
        """
        composer: Composer[C] = Composer(*middleware)
        self._handlers.append(composer)
        return composer

    def filter(self, predicate: Predicate, *middleware: Middleware) -> "Composer[C]":
        """Append a branch that only runs while ``predicate(ctx)`` holds.

        The predicate is evaluated each time a request reaches the branch.
        Requests it rejects skip the branch and continue down the chain.

        Returns:
            The composer behind the branch, for attaching further handlers
        """
        composer: Composer[C] = Composer(*middleware)

        async def branch(ctx: C, next_: NextFunction) -> None:
            if await invoke(predicate, ctx):
                await composer(ctx, next_)
            else:
                await next_()

        self._handlers.append(branch)
        return composer

    async def __call__(self, ctx: C, next_: NextFunction) -> None:
        await self._dispatch(0, ctx, next_)

    async def _dispatch(self, index: int, ctx: C, next_: NextFunction) -> None:
        if index >= len(self._handlers):
            await next_()
            return

        handler = self._handlers[index]
        called = False

        async def downstream() -> None:
            nonlocal called
            if called:
                raise PipelineError(f"next_() called multiple times by {_name(handler)}")
            called = True
            await self._dispatch(index + 1, ctx, next_)

        await invoke(handler, ctx, downstream)

    async def run(self, ctx: C) -> None:
        """Run the whole tree for one request."""
        logger.debug(f"Running pipeline for {type(ctx).__name__}")
        await self(ctx, _done)

    def run_sync(self, ctx: C) -> None:
        """Synchronous wrapper for run(), for use outside an event loop."""
        anyio.run(self.run, ctx)


def _name(handler: Callable) -> str:
    return getattr(handler, "__name__", type(handler).__name__)
