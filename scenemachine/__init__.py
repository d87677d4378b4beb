"""
Finite-state scene tracking for request-handling pipelines.

Scenes are named conversational modes. A session is in at most one scene at a
time; handlers registered for a scene only see requests from sessions in that
scene, and entry/exit hooks run as sessions move between scenes.

Typical wiring::

    registry = SceneRegistry()
    signup, signup_handlers = registry.register("signup", on_entry=greet)

    pipeline = Composer()
    pipeline.use(SessionMiddleware())
    pipeline.use(hydrate_scene(registry))
    pipeline.use(signup)
"""

from .composer import Composer, Middleware, NextFunction
from .exceptions import (
    DuplicateSceneError,
    PipelineError,
    SceneMachineError,
    SessionNotAvailableError,
    UnknownSceneError,
)
from .middleware import SceneMiddleware, hydrate_scene
from .models import Context, Hook, InScene, NoScene, SceneContext, SceneSession, SceneState, SceneSessionData
from .registry import SceneDefinition, SceneHandlers, SceneRegistry, in_scene
from .session import MemorySessionStorage, SessionConfig, SessionMiddleware, SessionStorage
from .transitions import TransitionController

__version__ = "0.1.0"
__author__ = "SceneMachine Contributors"
__license__ = "MIT"

__all__ = [
    "Composer",
    "Context",
    "DuplicateSceneError",
    "Hook",
    "InScene",
    "MemorySessionStorage",
    "Middleware",
    "NextFunction",
    "NoScene",
    "PipelineError",
    "SceneDefinition",
    "SceneHandlers",
    "SceneMachineError",
    "SceneContext",
    "SceneMiddleware",
    "SceneRegistry",
    "SceneSession",
    "SceneSessionData",
    "SceneState",
    "SessionConfig",
    "SessionMiddleware",
    "SessionNotAvailableError",
    "SessionStorage",
    "TransitionController",
    "UnknownSceneError",
    "hydrate_scene",
    "in_scene",
]
