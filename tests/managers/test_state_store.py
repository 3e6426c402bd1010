"""
Tests for the StateStore mutation and subscription contract.
"""

import pytest

from causal_dashboard.models.exceptions import StateTransitionError


class TestSnapshots:

    def test_snapshot_is_a_copy(self, store):
        snapshot = store.get_snapshot()
        snapshot.latent_variables[0]["value"] = 0.0
        snapshot.time_step = 9
        fresh = store.get_snapshot()
        assert fresh.latent_variables[0]["value"] == 0.75
        assert fresh.time_step == 0

    def test_mutate_is_the_only_write_path(self, store):
        public = {name for name in dir(store) if not name.startswith("_") and callable(getattr(store, name))}
        assert public == {"get_snapshot", "subscribe", "mutate", "listener_count"}


class TestMutate:

    def test_commit_returns_result_and_bumps_revision(self, store):
        def _advance(state):
            state.time_step += 1
            return "done"

        assert store.mutate(_advance) == "done"
        assert store.get_snapshot().time_step == 1
        assert store.revision == 1

    def test_failed_mutation_leaves_state_untouched(self, store):
        seen = []
        store.subscribe(seen.append)

        def _broken(state):
            state.time_step = 5
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            store.mutate(_broken)
        assert store.get_snapshot().time_step == 0
        assert store.revision == 0
        assert seen == []

    def test_nested_mutation_rejected(self, store):
        with pytest.raises(StateTransitionError):
            store.mutate(lambda state: store.mutate(lambda inner: None))
        # The store is usable again afterwards
        store.mutate(lambda state: setattr(state, "running", True))
        assert store.get_snapshot().running is True


class TestSubscribe:

    def test_listener_gets_one_snapshot_per_commit(self, store):
        seen = []
        store.subscribe(seen.append)
        store.mutate(lambda state: setattr(state, "time_step", 3))
        assert len(seen) == 1
        assert seen[0].time_step == 3

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        store.mutate(lambda state: setattr(state, "time_step", 3))
        assert seen == []
        assert store.listener_count() == 0

    def test_listener_may_mutate_again(self, store):
        def _follow_up(snapshot):
            if snapshot.time_step == 1:
                store.mutate(lambda state: setattr(state, "time_step", 2))

        store.subscribe(_follow_up)
        store.mutate(lambda state: setattr(state, "time_step", 1))
        assert store.get_snapshot().time_step == 2
