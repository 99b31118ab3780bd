"""
Services for the quiz agent.
"""

from .model_factory import create_chat_model, get_default_model

__all__ = [
    "create_chat_model",
    "get_default_model",
]
