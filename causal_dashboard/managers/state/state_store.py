from ...utils.logger.logger import Logger
from ...models.simulation_state import SimulationState
from ...models.exceptions import StateTransitionError


class StateStore:
    """Own the canonical SimulationState behind a snapshot/subscribe/mutate contract."""

    def __init__(self, initial_state: SimulationState = None):
        """Start from `initial_state` (copied) or a default state."""
        Logger.log("start StateStore__init__")
        self._state = initial_state.copy() if initial_state is not None else SimulationState()
        self._listeners = []
        self._mutating = False
        self.revision = 0
        Logger.log("end StateStore__init__")

    def get_snapshot(self) -> SimulationState:
        """Return a deep copy of the current state."""
        return self._state.copy()

    def subscribe(self, listener):
        """
        Register `listener(snapshot)`, called after every committed mutation.

        Returns:
            A callable that removes the listener; calling it twice is harmless.
        """
        Logger.log(f"start subscribe({listener})")
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
                Logger.log(f"unsubscribed {listener}")

        Logger.log(f"end subscribe: {len(self._listeners)} listener(s)")
        return unsubscribe

    def mutate(self, fn):
        """
        Apply `fn(draft)` to a copy of the state and commit it.

        The draft is only committed when `fn` returns without raising, so a
        failed mutation leaves the state untouched. Listeners are notified
        after the commit and may mutate again.

        Returns:
            Whatever `fn` returned.
        """
        if self._mutating:
            Logger.log("StateTransitionError: nested mutate()", Logger.LogPriority.ERROR)
            raise StateTransitionError("Cannot mutate state from inside another mutation.")

        self._mutating = True
        try:
            draft = self._state.copy()
            result = fn(draft)
            self._state = draft
            self.revision += 1
        finally:
            self._mutating = False

        self._notify()
        return result

    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self):
        if not self._listeners:
            return
        snapshot = self.get_snapshot()
        # Listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(snapshot)
