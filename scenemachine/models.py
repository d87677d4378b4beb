"""
Core data models for scene tracking.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Protocol, Union, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from .transitions import TransitionController


@dataclass(frozen=True)
class NoScene:
    """No scene is active for the session."""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class InScene:
    """The session is inside the named scene."""

    name: str


SceneState = Union[NoScene, InScene]


class SceneSessionData(BaseModel):
    """Persisted per-caller session record.

    Only the ``scene`` field belongs to scene tracking. Applications that keep
    more data in the session subclass this model and add their own fields.
    ``None`` means no scene is active.
    """

    model_config = ConfigDict(validate_assignment=True)

    scene: Optional[str] = None

    @property
    def state(self) -> SceneState:
        """The current scene as an explicit ``NoScene | InScene`` value."""
        if self.scene is None:
            return NoScene()
        return InScene(self.scene)


class SceneSession(Protocol):
    """Anything with a mutable ``scene`` field can back a scene session."""

    scene: Optional[str]


class SceneContext(Protocol):
    """Minimal request context capability needed by scene tracking."""

    session: Optional[SceneSession]
    scene: Optional["TransitionController"]


Hook = Callable[[Any], Union[None, Awaitable[None]]]


@dataclass
class Context:
    """Per-request context passed through the middleware pipeline.

    ``payload`` is whatever the transport delivered (a chat update, an HTTP
    request, a CLI line). ``session`` is attached by the session middleware
    and ``scene`` by the scene middleware. Other middleware may attach their
    own attributes.
    """

    payload: Any = None
    session: Optional[Any] = None
    scene: Optional["TransitionController"] = None
