"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters.
"""

from playlist_engine.application.interfaces.event_publisher import EventPublisher

__all__ = [
    "EventPublisher",
]
