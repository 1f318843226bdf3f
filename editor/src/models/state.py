"""View-state data model.

GlobalState is the single source of truth rendered by the UI. It is never
mutated: the dispatcher replaces it wholesale on every transition.
"""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple

from constants import CONTROL_POINT_KEYS, DEFAULT_MAPPINGS
from models.coord import ExtComplex
from models.curve import Curve


@dataclass(frozen=True)
class SamplePointMapping:
    """One control point: a source value and its image under the transformation."""
    in_: ExtComplex
    out: ExtComplex


@dataclass(frozen=True)
class MappingSet:
    """Exactly three control point mappings, the data that determines a Mobius transformation.

    Entries have fixed identities (val1, val2, val3); they can be replaced but
    never added or removed.
    """
    val1: SamplePointMapping
    val2: SamplePointMapping
    val3: SamplePointMapping

    @classmethod
    def default(cls):
        """Identity mapping used on first launch."""
        return cls(**{
            key: SamplePointMapping(in_, out)
            for key, (in_, out) in DEFAULT_MAPPINGS.items()
        })

    def get(self, key: str) -> SamplePointMapping:
        if key not in CONTROL_POINT_KEYS:
            raise KeyError(f"unknown control point: {key}")
        return getattr(self, key)

    def replace(self, key: str, mapping: SamplePointMapping) -> 'MappingSet':
        """Return a new MappingSet with one entry replaced."""
        if key not in CONTROL_POINT_KEYS:
            raise KeyError(f"unknown control point: {key}")
        return replace(self, **{key: mapping})

    def items(self) -> Iterator[Tuple[str, SamplePointMapping]]:
        for key in CONTROL_POINT_KEYS:
            yield key, getattr(self, key)

    @property
    def inputs(self) -> Tuple[ExtComplex, ExtComplex, ExtComplex]:
        return (self.val1.in_, self.val2.in_, self.val3.in_)

    @property
    def outputs(self) -> Tuple[ExtComplex, ExtComplex, ExtComplex]:
        return (self.val1.out, self.val2.out, self.val3.out)


def _freeze_curves(curves) -> Mapping[str, Tuple[Curve, ...]]:
    return MappingProxyType({key: tuple(value) for key, value in curves.items()})


@dataclass(frozen=True)
class GlobalState:
    """Everything needed to render the current Mobius transformation.

    Invariant: when ``exists`` is False, ``curves`` is empty.
    """
    points: MappingSet
    curves: Mapping[str, Tuple[Curve, ...]] = field(default_factory=dict)
    exists: bool = True

    def __post_init__(self):
        if not self.exists and self.curves:
            raise ValueError("a state without a transformation cannot carry curves")
        object.__setattr__(self, 'curves', _freeze_curves(self.curves))

    @classmethod
    def invalid(cls, points: MappingSet) -> 'GlobalState':
        """State for a mapping with no corresponding transformation."""
        return cls(points=points, curves={}, exists=False)
