"""Status display collaborator.

The device may carry a small panel showing the target temperature.
``LoggingDisplay`` is used when no panel is attached.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Display(ABC):
    @abstractmethod
    def show_target(self, temperature: int) -> None:
        """Show the new target temperature."""
        ...


class LoggingDisplay(Display):
    """Writes target changes to the log instead of a panel."""

    def __init__(self) -> None:
        self.last_target: int | None = None

    def show_target(self, temperature: int) -> None:
        self.last_target = temperature
        logger.info("Display target temperature: %d", temperature)
