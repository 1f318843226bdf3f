"""Actions and the command handler that applies them to the global state.

apply_action takes the current state snapshot and an action, calls the
transformation service if needed, and returns a brand new GlobalState. It
never mutates its input. A transformation that does not exist is a normal
outcome: it becomes ``exists=False`` in the returned state.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from constants import CONTROL_POINT_KEYS, CURVE_FAMILY_NAMES
from models.coord import ExtComplex
from models.state import GlobalState, MappingSet, SamplePointMapping
from services.transformation_service import TransformationDoesNotExist

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetMapping:
    """Replace the input and/or output of one control point."""
    key: str
    in_: Optional[ExtComplex] = None
    out: Optional[ExtComplex] = None

    def __post_init__(self):
        if self.key not in CONTROL_POINT_KEYS:
            raise KeyError(f"unknown control point: {self.key}")

    def merged_with(self, newer: 'SetMapping') -> 'SetMapping':
        """Combine with a newer edit of the same point; newer fields win."""
        return SetMapping(
            key=self.key,
            in_=newer.in_ if newer.in_ is not None else self.in_,
            out=newer.out if newer.out is not None else self.out,
        )


@dataclass(frozen=True)
class ToggleCurves:
    """Show or hide a curve family."""
    key: str
    value: bool

    def __post_init__(self):
        if self.key not in CURVE_FAMILY_NAMES:
            raise KeyError(f"unknown curve family: {self.key}")


@dataclass(frozen=True)
class LoadMapping:
    """Replace the whole mapping and the set of active families (opening a file)."""
    points: MappingSet
    curve_families: Tuple[str, ...]

    def __post_init__(self):
        unknown = [key for key in self.curve_families if key not in CURVE_FAMILY_NAMES]
        if unknown:
            raise KeyError(f"unknown curve families: {unknown}")
        object.__setattr__(self, 'curve_families', tuple(self.curve_families))


def get_used_curves(curves):
    """Keys of the active curve families, in display order."""
    return [key for key in CURVE_FAMILY_NAMES if key in curves]


def generate_state(points, used_curves, service):
    """Ask the service for a full recomputation and wrap the result as a GlobalState."""
    try:
        curves = service.generate_mobius_transformation(points.inputs, points.outputs, list(used_curves))
    except TransformationDoesNotExist:
        logger.info("No Mobius transformation exists for the current mapping")
        return GlobalState.invalid(points)
    return GlobalState(points=points, curves=curves, exists=True)


def apply_action(state, action, service, used_curves):
    """Apply one action to a state snapshot.

    Args:
        state: Current GlobalState (not modified)
        action: SetMapping, ToggleCurves or LoadMapping
        service: TransformationService used for recomputation
        used_curves: Cached list of active family keys

    Returns:
        GlobalState: The replacement state (may be ``state`` itself for no-ops)

    Raises:
        TypeError: for an unknown action type
    """
    if isinstance(action, SetMapping):
        return _apply_set_mapping(state, action, service, used_curves)
    if isinstance(action, ToggleCurves):
        return _apply_toggle_curves(state, action, service)
    if isinstance(action, LoadMapping):
        return generate_state(action.points, get_used_curves(set(action.curve_families)), service)
    raise TypeError(f"unknown action type: {type(action).__name__}")


def _apply_set_mapping(state, action, service, used_curves):
    old_mapping = state.points.get(action.key)
    new_mapping = SamplePointMapping(
        in_=action.in_ if action.in_ is not None else old_mapping.in_,
        out=action.out if action.out is not None else old_mapping.out,
    )
    new_points = state.points.replace(action.key, new_mapping)
    return generate_state(new_points, used_curves, service)


def _apply_toggle_curves(state, action, service):
    currently_used = action.key in state.curves
    if action.value == currently_used:
        return state

    if action.value:
        # Only the toggled family is requested; existing families are kept as they are
        try:
            response = service.generate_mobius_transformation(
                state.points.inputs, state.points.outputs, [action.key])
        except TransformationDoesNotExist:
            logger.info("Cannot show %s: no Mobius transformation exists", action.key)
            return GlobalState.invalid(state.points)
        new_curves = dict(state.curves)
        new_curves[action.key] = response[action.key]
        return GlobalState(points=state.points, curves=new_curves, exists=True)

    new_curves = dict(state.curves)
    del new_curves[action.key]
    return GlobalState(points=state.points, curves=new_curves, exists=state.exists)
