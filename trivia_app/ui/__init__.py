"""Qt integration for hosts of the trivia presentation."""

from .presentation_bridge import PresentationBridge

__all__ = [
    "PresentationBridge",
]
