"""UI components for the Mobius Visualizer

Direct imports for convenience:
"""

from .graph_canvas import GraphCanvas
from .graph_view import GraphView
from .movable_point import MovablePoint
from .sidebar import Sidebar

__all__ = [
    'GraphCanvas',
    'GraphView',
    'MovablePoint',
    'Sidebar',
]
