"""
Registry of known scenes and their entry/exit hooks.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional

from .composer import Composer
from .exceptions import DuplicateSceneError
from .models import Hook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SceneDefinition:
    """A registered scene. Immutable once created."""

    name: str
    on_entry: Optional[Hook] = None
    on_exit: Optional[Hook] = None


class SceneHandlers(NamedTuple):
    """Handler attachment points returned by :meth:`SceneRegistry.register`.

    Attributes:
        middleware: Composer to mount in the host pipeline.
        builder: Filtered branch of ``middleware``; handlers attached here only
                 run while the session is in the scene.
    """

    middleware: Composer
    builder: Composer


def in_scene(name: str) -> Callable[[object], bool]:
    """Build a predicate admitting requests whose session is in ``name``.

    The session field is read at call time, so a transition made earlier in
    the same request changes the outcome.
    """

    def predicate(ctx) -> bool:
        session = getattr(ctx, "session", None)
        admitted = session is not None and session.scene == name
        logger.debug(f"Scene filter {name}: {'admit' if admitted else 'skip'}")
        return admitted

    predicate.__name__ = f"in_scene_{name}"
    return predicate


class SceneRegistry:
    """Process-wide table of scenes.

    Build one at startup, register every scene, then hand it to the scene
    middleware. Registration is not synchronised; finish it before serving
    requests. There is no way to unregister a scene.
    """

    def __init__(self):
        self._scenes: Dict[str, SceneDefinition] = {}

    def register(self, name: str, on_entry: Optional[Hook] = None, on_exit: Optional[Hook] = None) -> SceneHandlers:
        """Register a scene and return the handlers that run inside it.

        Example::

            registry = SceneRegistry()
            middleware, builder = registry.register("signup", on_entry=ask_name)

            async def collect_name(ctx, next_):
                ...

            builder.use(collect_name)

            pipeline.use(middleware)

        Args:
            name: Unique scene name
            on_entry: Hook called with the context after entering the scene
            on_exit: Hook called with the context after leaving the scene

        Returns:
            SceneHandlers(middleware, builder)

        Raises:
            DuplicateSceneError: If ``name`` is already registered. The
                existing definition is left untouched.
        """
        if name in self._scenes:
            raise DuplicateSceneError(name)

        self._scenes[name] = SceneDefinition(name, on_entry, on_exit)
        logger.info(
            f"Registered scene {name} "
            f"(entry hook: {on_entry is not None}, exit hook: {on_exit is not None})"
        )

        middleware: Composer = Composer()
        builder = middleware.filter(in_scene(name))
        return SceneHandlers(middleware, builder)

    def has_scene(self, name: str) -> bool:
        return name in self._scenes

    def get(self, name: str) -> Optional[SceneDefinition]:
        return self._scenes.get(name)

    def entry_hook_for(self, name: str) -> Optional[Hook]:
        definition = self._scenes.get(name)
        return definition.on_entry if definition else None

    def exit_hook_for(self, name: str) -> Optional[Hook]:
        definition = self._scenes.get(name)
        return definition.on_exit if definition else None

    @property
    def names(self) -> List[str]:
        """Registered scene names in registration order."""
        return list(self._scenes)

    def __contains__(self, name: object) -> bool:
        return name in self._scenes

    def __iter__(self) -> Iterator[SceneDefinition]:
        return iter(list(self._scenes.values()))

    def __len__(self) -> int:
        return len(self._scenes)
