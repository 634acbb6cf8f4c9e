"""Audit — append-only event log and state replay."""

from .event_log import EventLog
from .replay import replay_offers, replay_token

__all__ = [
    "EventLog",
    "replay_offers",
    "replay_token",
]
