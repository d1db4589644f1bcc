"""Device restart collaborator, also used as the factory reset hook."""

from __future__ import annotations

import logging
import os
import sys
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Restarter(ABC):
    @abstractmethod
    def restart(self) -> None:
        """Restart the device software. Normally does not return."""
        ...


class ProcessRestarter(Restarter):
    """Restarts killd itself.

    ``exec`` replaces the running process with a fresh copy of the same
    command line; ``exit`` terminates with ``exit_code`` and leaves the
    restart to the service supervisor (systemd ``Restart=on-failure``).
    """

    def __init__(self, mode: str = "exec", exit_code: int = 3) -> None:
        if mode not in ("exec", "exit"):
            raise ValueError(f"Unknown restart mode: {mode}")
        self._mode = mode
        self._exit_code = exit_code

    def restart(self) -> None:
        logger.warning("Restarting (%s)", self._mode)
        logging.shutdown()
        if self._mode == "exec":
            os.execv(sys.executable, [sys.executable, *sys.argv])
        os._exit(self._exit_code)

