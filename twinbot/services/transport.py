"""
Team transport - the link the twins report over.

The orchestrator only needs an object with broadcast(payload) that raises
TransportError when a send cannot complete. TeamChannel is an in-process
implementation: one FIFO queue per receiver, ordered per sender, with an
optional drop rule to model lossy delivery.
"""

from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple


class TransportError(Exception):
    """A broadcast could not be delivered."""


class TeamChannel:
    """In-memory link between exactly two named endpoints."""

    def __init__(
        self,
        names: Tuple[str, str] = ("alpha", "beta"),
        drop: Optional[Callable[[str, str], bool]] = None
    ):
        if len(names) != 2 or names[0] == names[1]:
            raise ValueError(f"TeamChannel needs two distinct names, got {names}")
        self.names = names
        self.drop = drop  # (sender, payload) -> True to lose the message
        self.closed = False
        self._inboxes: Dict[str, Deque[str]] = {name: deque() for name in names}

    def endpoint(self, name: str) -> 'TeamEndpoint':
        if name not in self._inboxes:
            raise KeyError(f"Unknown endpoint {name!r}")
        return TeamEndpoint(self, name)

    def close(self):
        self.closed = True

    def _peer_of(self, name: str) -> str:
        return self.names[1] if name == self.names[0] else self.names[0]

    def _send(self, sender: str, payload: str):
        if self.closed:
            raise TransportError("channel closed")
        if self.drop and self.drop(sender, payload):
            return
        self._inboxes[self._peer_of(sender)].append(payload)

    def _drain(self, name: str) -> List[str]:
        inbox = self._inboxes[name]
        messages = list(inbox)
        inbox.clear()
        return messages


class TeamEndpoint:
    """One robot's side of a TeamChannel."""

    def __init__(self, channel: TeamChannel, name: str):
        self.channel = channel
        self.name = name

    def broadcast(self, payload: str):
        self.channel._send(self.name, payload)

    def receive(self) -> List[str]:
        """Pending payloads from the teammate, oldest first."""
        return self.channel._drain(self.name)
