"""
Middleware attaching a transition controller to every request.
"""

from typing import Any

from .composer import NextFunction
from .registry import SceneRegistry
from .transitions import TransitionController


class SceneMiddleware:
    """Attach a fresh :class:`TransitionController` to each request context.

    Install it before any scene-filtered handlers. It never filters or
    short-circuits, and errors raised further down the chain pass through.

    Args:
        registry: The registry populated at startup
        attribute: Context attribute receiving the controller
    """

    def __init__(self, registry: SceneRegistry, attribute: str = "scene"):
        self.registry = registry
        self.attribute = attribute

    async def __call__(self, ctx: Any, next_: NextFunction) -> None:
        setattr(ctx, self.attribute, TransitionController(ctx, self.registry))
        await next_()


def hydrate_scene(registry: SceneRegistry, attribute: str = "scene") -> SceneMiddleware:
    """Create the scene middleware for ``registry``."""
    return SceneMiddleware(registry, attribute)
