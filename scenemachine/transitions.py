"""
Per-request scene transitions.

The controller moves a session between two states, no scene and inside a
named scene. Both transitions write the session first and only then run the
scene's hook, so a hook always sees the new state. Hook errors are not caught:
the session keeps its new value and the error propagates to the caller.
"""

import logging
from typing import Optional

from .composer import invoke
from .exceptions import SessionNotAvailableError, UnknownSceneError
from .models import Hook, InScene, NoScene, SceneContext, SceneState
from .registry import SceneRegistry

logger = logging.getLogger(__name__)


class TransitionController:
    """Scene transitions for a single request.

    Created by the scene middleware and attached to the request context. It
    holds a reference to the context and reads ``ctx.session`` on every call.
    """

    def __init__(self, ctx: SceneContext, registry: SceneRegistry):
        self._ctx = ctx
        self._registry = registry

    @property
    def session(self):
        session = getattr(self._ctx, "session", None)
        if session is None:
            raise SessionNotAvailableError()
        return session

    @property
    def current(self) -> Optional[str]:
        """Name of the active scene, or None."""
        return self.session.scene

    @property
    def state(self) -> SceneState:
        scene = self.session.scene
        return NoScene() if scene is None else InScene(scene)

    async def enter(self, scene: str, suppress_entry: bool = False) -> None:
        """Enter ``scene`` and run its entry hook.

        Entering never exits the previous scene; call :meth:`exit` first if its
        exit hook should run. Re-entering the active scene runs the entry hook
        again.

        Args:
            scene: Registered scene name
            suppress_entry: Skip the entry hook

        Raises:
            UnknownSceneError: If ``scene`` is not registered. The session is
                not modified.
        """
        if not self._registry.has_scene(scene):
            raise UnknownSceneError(scene)

        session = self.session
        previous = session.scene
        session.scene = scene
        if previous == scene:
            logger.debug(f"Re-entering scene {scene}")
        else:
            logger.debug(f"Scene transition: {previous} -> {scene}")

        hook = self._registry.entry_hook_for(scene)
        if suppress_entry or hook is None:
            if hook is not None:
                logger.debug(f"Entry hook for scene {scene} suppressed")
            return
        await self._run_hook(hook, "entry", scene)

    async def exit(self, suppress_exit: bool = False) -> None:
        """Leave the active scene and run its exit hook.

        Does nothing when no scene is active.

        Args:
            suppress_exit: Skip the exit hook
        """
        session = self.session
        scene = session.scene
        if scene is None:
            logger.debug("Exit requested with no active scene")
            return

        session.scene = None
        logger.debug(f"Scene transition: {scene} -> None")

        hook = self._registry.exit_hook_for(scene)
        if suppress_exit or hook is None:
            if hook is not None:
                logger.debug(f"Exit hook for scene {scene} suppressed")
            return
        await self._run_hook(hook, "exit", scene)

    async def _run_hook(self, hook: Hook, kind: str, scene: str) -> None:
        try:
            await invoke(hook, self._ctx)
        except Exception as e:
            logger.error(f"Error in {kind} hook for scene {scene}: {e}", exc_info=True)
            raise
