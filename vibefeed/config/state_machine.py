"""Lifecycle of a single ranking.yaml load.

A load reads one file, validates it, and hands the result to the caller:

    UNLOADED -> LOADING -> VALIDATED -> READY
                       \\-> FAILED

Only reading and validating can fail. READY and FAILED are terminal, so a
loader is used for exactly one file.
"""

from enum import Enum, auto


class ConfigState(Enum):
    """Where a ConfigLoader is in its single load."""

    UNLOADED = auto()
    LOADING = auto()
    VALIDATED = auto()
    READY = auto()
    FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self not in LOAD_TRANSITIONS


LOAD_TRANSITIONS: dict[ConfigState, frozenset[ConfigState]] = {
    ConfigState.UNLOADED: frozenset({ConfigState.LOADING}),
    ConfigState.LOADING: frozenset({ConfigState.VALIDATED, ConfigState.FAILED}),
    ConfigState.VALIDATED: frozenset({ConfigState.READY}),
}


class ConfigStateError(Exception):
    """Raised when a load step happens out of order."""

    def __init__(self, from_state: ConfigState, to_state: ConfigState) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid state transition: {from_state.name} -> {to_state.name}"
        )


class ConfigStateMachine:
    """Tracks one load through LOAD_TRANSITIONS and records the path taken."""

    def __init__(self) -> None:
        self._history: list[ConfigState] = [ConfigState.UNLOADED]

    @property
    def state(self) -> ConfigState:
        """Get the current state."""
        return self._history[-1]

    @property
    def history(self) -> list[ConfigState]:
        """Get every state visited, oldest first."""
        return self._history.copy()

    def can_transition(self, to_state: ConfigState) -> bool:
        """Check whether the load may move to the given state."""
        return to_state in LOAD_TRANSITIONS.get(self.state, frozenset())

    def transition(self, to_state: ConfigState) -> None:
        """Move the load to a new state.

        Args:
            to_state: The target state.

        Raises:
            ConfigStateError: If the load cannot reach to_state from here.
        """
        if not self.can_transition(to_state):
            raise ConfigStateError(self.state, to_state)
        self._history.append(to_state)
