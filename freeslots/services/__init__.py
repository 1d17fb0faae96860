"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability_service import AvailabilityService, FeedClientProtocol
from .command_router import BotReply, Command, CommandRouter, EventKind, IncomingEvent, route

__all__ = [
    "AvailabilityService",
    "BotReply",
    "Command",
    "CommandRouter",
    "EventKind",
    "FeedClientProtocol",
    "IncomingEvent",
    "route",
]
