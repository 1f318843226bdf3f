"""
pytest-qt tests for StateStore: queueing, coalescing and the active family cache.
"""
import logging

import pytest

from conftest import RecordingService
from services.state_dispatch import LoadMapping, SetMapping, ToggleCurves
from services.state_store import StateStore


# ══════════════════════════════════════════════════════════════════════════
# Bootstrap
# ══════════════════════════════════════════════════════════════════════════

class TestBootstrap:

    def test_valid_initial_state(self, store, service):
        assert store.state.exists
        assert list(store.state.curves) == ['cartesian']
        assert store.used_curves == ['cartesian']
        assert len(service.calls) == 1

    def test_invalid_initial_state_remembers_families(self, qapp, singular_points, service):
        store = StateStore.bootstrap(singular_points, ['polar', 'cartesian'], service)
        assert not store.state.exists
        assert store.used_curves == ['cartesian', 'polar']

    def test_used_curves_is_a_copy(self, store):
        store.used_curves.append('polar')
        assert store.used_curves == ['cartesian']


# ══════════════════════════════════════════════════════════════════════════
# Dispatch
# ══════════════════════════════════════════════════════════════════════════

class TestDispatch:

    def test_dispatch_is_deferred(self, store):
        before = store.state
        store.dispatch(SetMapping('val1', out=1j))
        assert store.state is before
        assert store.has_pending()

    def test_state_changed_signal(self, qtbot, store):
        with qtbot.waitSignal(store.stateChanged, timeout=1000) as blocker:
            store.dispatch(SetMapping('val1', out=1j))
        assert blocker.args[0] is store.state
        assert store.state.points.val1.out == 1j
        assert not store.has_pending()

    def test_drag_burst_coalesces(self, store, service):
        service.calls.clear()
        for x in range(10):
            store.dispatch(SetMapping('val2', out=complex(5 + x, 0)))
        store.flush()
        assert len(service.calls) == 1
        assert store.state.points.val2.out == 14 + 0j

    def test_coalescing_merges_sides(self, store):
        store.dispatch(SetMapping('val2', in_=4 + 0j))
        store.dispatch(SetMapping('val2', out=6 + 0j))
        store.flush()
        assert store.state.points.val2.in_ == 4 + 0j
        assert store.state.points.val2.out == 6 + 0j

    def test_different_points_are_not_coalesced(self, store, service):
        service.calls.clear()
        store.dispatch(SetMapping('val1', out=1 + 0j))
        store.dispatch(SetMapping('val2', out=6 + 0j))
        store.flush()
        assert len(service.calls) == 2
        assert store.state.points.val1.out == 1 + 0j
        assert store.state.points.val2.out == 6 + 0j

    def test_actions_see_previous_results(self, store):
        store.dispatch(ToggleCurves('polar', True))
        store.dispatch(SetMapping('val1', out=1j))
        store.flush()
        # The mapping change recomputed both families
        assert set(store.state.curves) == {'cartesian', 'polar'}
        assert store.used_curves == ['cartesian', 'polar']

    def test_noop_does_not_emit(self, qtbot, store):
        with qtbot.assertNotEmitted(store.stateChanged):
            store.dispatch(ToggleCurves('cartesian', True))
            store.flush()

    def test_unknown_action_raises(self, store):
        store.dispatch(object())
        with pytest.raises(TypeError):
            store.flush()


# ══════════════════════════════════════════════════════════════════════════
# Active family cache
# ══════════════════════════════════════════════════════════════════════════

class TestUsedCurves:

    def test_failure_keeps_families(self, store):
        store.dispatch(ToggleCurves('polar', True))
        store.flush()
        store.dispatch(SetMapping('val3', out=5 + 0j))
        store.flush()
        assert not store.state.exists
        assert store.used_curves == ['cartesian', 'polar']

        # Fixing the mapping brings both families back
        store.dispatch(SetMapping('val3', out=5j))
        store.flush()
        assert store.state.exists
        assert set(store.state.curves) == {'cartesian', 'polar'}

    def test_toggle_off_updates_cache(self, store):
        store.dispatch(ToggleCurves('cartesian', False))
        store.flush()
        assert store.used_curves == []

    def test_failed_load_remembers_file_families(self, store, singular_points):
        store.dispatch(LoadMapping(singular_points, ['apollonian']))
        store.flush()
        assert not store.state.exists
        assert store.used_curves == ['apollonian']

    def test_drift_is_logged_and_repaired(self, store, caplog):
        store._used_curves = ['polar']
        with caplog.at_level(logging.ERROR, logger='services.state_store'):
            store.dispatch(SetMapping('val1', out=1j))
            store.flush()
        assert any("drifted" in r.message for r in caplog.records)
        assert set(store.state.curves) == {'cartesian'}

    def test_no_check_without_flag(self, qapp, identity_points, caplog):
        store = StateStore.bootstrap(identity_points, ['cartesian'], RecordingService(), check_cache=False)
        store._used_curves = ['polar']
        with caplog.at_level(logging.ERROR, logger='services.state_store'):
            store.dispatch(SetMapping('val1', out=1j))
            store.flush()
        assert not caplog.records
        assert set(store.state.curves) == {'polar'}
