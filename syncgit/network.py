"""Network reachability heuristic."""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from typing import Callable

from .config import Settings

logger = logging.getLogger(__name__)

ConnectivityProbe = Callable[[], bool]


@dataclass(frozen=True)
class SocketProbe:
    """Open and close a TCP connection with a short timeout.

    A successful probe does not guarantee that a later push will succeed.
    """

    host: str = "8.8.8.8"
    port: int = 53
    timeout: float = 3.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "SocketProbe":
        return cls(settings.probe_host, settings.probe_port, settings.probe_timeout)

    def __call__(self) -> bool:
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True
        except OSError as exc:
            logger.debug("Connectivity probe to %s:%s failed: %s", self.host, self.port, exc)
            return False
