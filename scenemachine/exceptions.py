"""
Custom exceptions for scene tracking.
"""
class SceneMachineError(Exception):
    """Base exception for scene tracking errors."""

    pass


class DuplicateSceneError(SceneMachineError):
    """Raised when a scene name is registered more than once."""

    def __init__(self, scene: str):
        self.scene = scene
        super().__init__(f"Scene {scene} already exists. Refusing to register.")


class UnknownSceneError(SceneMachineError):
    """Raised when entering a scene that was never registered."""

    def __init__(self, scene: str):
        self.scene = scene
        super().__init__(f"Scene {scene} does not exist. Refusing to enter.")


class SessionNotAvailableError(SceneMachineError):
    """Raised when a transition is attempted on a context without a session."""

    def __init__(self, message="Session data is not available. Install the session middleware before using scenes."):
        self.message = message
        super().__init__(self.message)


class PipelineError(SceneMachineError):
    """Raised when the middleware pipeline is misused."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
