"""
Mobius Visualizer - Data Models

This module contains the data model classes for the visualizer.
This is the MODEL in MVC architecture.

- coord: complex/pixel coordinate systems and the point at infinity
- curve: circle/line curve representation
- state: control point mappings and the global view-state
"""

from .coord import INF, Extent2d, Position2d, clamp_to_extent, to_logical, to_physical
from .curve import Circle, InvalidCurveError, Line
from .state import GlobalState, MappingSet, SamplePointMapping

__all__ = [
    'INF', 'Extent2d', 'Position2d', 'clamp_to_extent', 'to_logical', 'to_physical',
    'Circle', 'InvalidCurveError', 'Line',
    'GlobalState', 'MappingSet', 'SamplePointMapping',
]
