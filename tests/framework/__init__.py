"""
Test framework for conversational pipeline testing.
"""

from .dsl import ChatDsl, ChatMessage

__all__ = [
    'ChatDsl',
    'ChatMessage',
]
