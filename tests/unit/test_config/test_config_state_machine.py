"""Tests for the configuration load lifecycle."""

import pytest

from vibefeed.config.state_machine import (
    ConfigState,
    ConfigStateError,
    ConfigStateMachine,
)


class TestConfigStateMachine:
    """Tests for state transitions."""

    def test_initial_state(self) -> None:
        """Machines start UNLOADED."""
        machine = ConfigStateMachine()
        assert machine.state == ConfigState.UNLOADED
        assert machine.history == [ConfigState.UNLOADED]

    def test_happy_path(self) -> None:
        """UNLOADED -> LOADING -> VALIDATED -> READY."""
        machine = ConfigStateMachine()
        for state in (ConfigState.LOADING, ConfigState.VALIDATED, ConfigState.READY):
            machine.transition(state)

        assert machine.state == ConfigState.READY
        assert machine.history == [
            ConfigState.UNLOADED,
            ConfigState.LOADING,
            ConfigState.VALIDATED,
            ConfigState.READY,
        ]

    def test_skip_is_rejected(self) -> None:
        """States cannot be skipped."""
        machine = ConfigStateMachine()
        with pytest.raises(ConfigStateError, match="UNLOADED -> READY"):
            machine.transition(ConfigState.READY)

    def test_only_loading_can_fail(self) -> None:
        """Failure happens while reading or validating, not before or after."""
        machine = ConfigStateMachine()
        assert not machine.can_transition(ConfigState.FAILED)

        machine.transition(ConfigState.LOADING)
        assert machine.can_transition(ConfigState.FAILED)

        machine.transition(ConfigState.VALIDATED)
        assert not machine.can_transition(ConfigState.FAILED)

    def test_failed_is_terminal(self) -> None:
        """Nothing leaves FAILED."""
        machine = ConfigStateMachine()
        machine.transition(ConfigState.LOADING)
        machine.transition(ConfigState.FAILED)

        assert machine.state.is_terminal
        for state in ConfigState:
            assert not machine.can_transition(state)

    def test_ready_is_terminal(self) -> None:
        """A READY load cannot restart or fail."""
        machine = ConfigStateMachine()
        for state in (ConfigState.LOADING, ConfigState.VALIDATED, ConfigState.READY):
            machine.transition(state)

        with pytest.raises(ConfigStateError, match="READY -> FAILED"):
            machine.transition(ConfigState.FAILED)
        with pytest.raises(ConfigStateError, match="READY -> LOADING"):
            machine.transition(ConfigState.LOADING)

    @pytest.mark.parametrize(
        ("state", "terminal"),
        [
            (ConfigState.UNLOADED, False),
            (ConfigState.LOADING, False),
            (ConfigState.VALIDATED, False),
            (ConfigState.READY, True),
            (ConfigState.FAILED, True),
        ],
    )
    def test_is_terminal(self, state: ConfigState, terminal: bool) -> None:
        """Only READY and FAILED are terminal."""
        assert state.is_terminal is terminal
