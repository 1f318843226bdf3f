"""State store - owns the GlobalState and serializes dispatched actions.

Actions are queued and handled one at a time on the Qt event loop, each one
against the state produced by the previous one. A burst of SetMapping actions
for the same control point (a drag) collapses into the newest one, so a drag
costs at most one service call per event loop turn.

The store also keeps a denormalized list of active curve families so a
mapping change can request a full recomputation without rescanning the
CurveSet. The list is refreshed after every successful transition.
"""
import logging
from collections import deque

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from services.state_dispatch import LoadMapping, SetMapping, apply_action, generate_state, get_used_curves
from utils.logger import DEBUG_MODE

logger = logging.getLogger(__name__)


class StateStore(QObject):
	"""Holds the current GlobalState; dispatch() is the only way to change it."""

	# Signals
	stateChanged = pyqtSignal(object)  # GlobalState, emitted after every replacement

	def __init__(self, initial_state, service, parent=None, check_cache=DEBUG_MODE):
		"""
		Args:
			initial_state: GlobalState to start from
			service: TransformationService used by actions
			parent: Optional QObject parent
			check_cache: Recompute and compare the active family cache on every transition
		"""
		super().__init__(parent)
		self._state = initial_state
		self._service = service
		self._used_curves = get_used_curves(initial_state.curves)
		self._check_cache = check_cache

		self._pending = deque()
		self._processing = False
		self._scheduled = False

	@classmethod
	def bootstrap(cls, points, curve_families, service, parent=None, **kwargs):
		"""Create a store from an initial mapping and the families to show.

		The service is called once to compute the initial curves. If the
		mapping has no transformation the store starts invalid, and the
		requested families are remembered for when the mapping is fixed.
		"""
		state = generate_state(points, list(curve_families), service)
		store = cls(state, service, parent=parent, **kwargs)
		if not state.exists:
			store._used_curves = get_used_curves(set(curve_families))
		return store

	@property
	def state(self):
		return self._state

	@property
	def used_curves(self):
		"""Active curve families used for the next full recomputation."""
		return list(self._used_curves)

	@property
	def service(self):
		return self._service

	def has_pending(self):
		return bool(self._pending) or self._processing

	def dispatch(self, action):
		"""Queue an action; it runs on a later turn of the event loop."""
		if (isinstance(action, SetMapping) and self._pending
				and isinstance(self._pending[-1], SetMapping)
				and self._pending[-1].key == action.key):
			self._pending[-1] = self._pending[-1].merged_with(action)
		else:
			self._pending.append(action)
		self._schedule()

	def flush(self):
		"""Process every queued action now."""
		while self._pending and not self._processing:
			self._process_next()

	def _schedule(self):
		if self._scheduled:
			return
		self._scheduled = True
		QTimer.singleShot(0, self._on_scheduled)

	def _on_scheduled(self):
		self._scheduled = False
		if not self._pending:
			return
		self._process_next()
		if self._pending:
			self._schedule()

	def _process_next(self):
		if self._processing:
			# Already inside apply_action; the queue is drained once it returns
			return
		if self._check_cache:
			self._verify_used_curves()
		action = self._pending.popleft()
		self._processing = True
		try:
			new_state = apply_action(self._state, action, self._service, self._used_curves)
		finally:
			self._processing = False
		if isinstance(action, LoadMapping) and not new_state.exists:
			# Nothing to derive the families from; keep the requested ones for the next fix
			self._used_curves = get_used_curves(set(action.curve_families))
		self._replace_state(new_state)

	def _replace_state(self, new_state):
		if new_state is self._state:
			return
		self._state = new_state
		if new_state.exists:
			self._used_curves = get_used_curves(new_state.curves)
		self.stateChanged.emit(new_state)

	def _verify_used_curves(self):
		"""Compare the cached active families with the CurveSet they are derived from."""
		if not self._state.exists:
			return
		expected = get_used_curves(self._state.curves)
		if expected != self._used_curves:
			logger.error("Active curve cache drifted: cached=%s actual=%s", self._used_curves, expected)
			self._used_curves = expected
