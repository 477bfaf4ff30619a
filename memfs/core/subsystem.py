"""
memfs Subsystem Base

Lifecycle shared by the long-lived parts of a session (the virtual
filesystem and the shell).

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from enum import Enum, auto

from memfs.logger import Logger, get_logger


class SubsystemState(Enum):
    """Lifecycle state of a subsystem."""
    CREATED = auto()
    INITIALIZED = auto()
    RUNNING = auto()
    STOPPED = auto()


class Subsystem(ABC):
    """
    Abstract base class for session subsystems.

    Lifecycle:
        1. __init__() - Subsystem is created
        2. initialize() - Subsystem builds its state
        3. start() - Subsystem starts operation
        4. stop() - Subsystem stops operation
    """

    def __init__(self, name: str):
        self._name = name
        self._logger = get_logger(name)
        self._state = SubsystemState.CREATED

    @property
    def name(self) -> str:
        """Get the subsystem name."""
        return self._name

    @property
    def state(self) -> SubsystemState:
        """Get the current state."""
        return self._state

    @property
    def logger(self) -> Logger:
        """Get the subsystem logger."""
        return self._logger

    def set_state(self, state: SubsystemState) -> None:
        """Set the subsystem state."""
        self._state = state
        self._logger.debug(f"State changed to {state.name}")

    @abstractmethod
    def initialize(self) -> None:
        """Build the subsystem's initial state."""

    def start(self) -> None:
        """Begin normal operation."""
        self.set_state(SubsystemState.RUNNING)

    def stop(self) -> None:
        """Stop operation."""
        self.set_state(SubsystemState.STOPPED)
