"""
Mobius Visualizer - Constants and Configuration

This module contains all constant values used throughout the application:
- Logical/physical coordinate scale
- Curve family names
- Default control point mappings
- Theme color tables
- Rendering and window constants
"""

# ======================================================================
# COORDINATE SYSTEM
# ======================================================================

# How many pixels correspond to one unit along either the real/imaginary axis.
# Logical (complex) origin sits at the center of the canvas, imaginary axis up.
# Physical (pixel) origin sits at the top-left of the canvas, y axis down.
PIXELS_PER_UNIT = 15

# Extent used until the canvas container reports its real size
INITIAL_EXTENT_WIDTH = 100
INITIAL_EXTENT_HEIGHT = 100

# ======================================================================
# CURVE FAMILIES
# ======================================================================

# Display names, in the order families are listed in the sidebar.
# Keys double as the identifiers sent to the transformation service.
CURVE_FAMILY_NAMES = {
    'cartesian': 'Cartesian grid',
    'polar': 'Polar grid',
    'apollonian': 'Apollonian circles',
}

DEFAULT_CURVE_FAMILIES = ['cartesian']

# Cartesian family: x = k and y = k for k in this range
CARTESIAN_GRID_RANGE = range(-5, 6)

# Polar family: concentric circles and rays through the origin
POLAR_RADII = (1, 2, 3, 4, 5)
POLAR_RAY_COUNT = 6  # rays every 180/6 = 30 degrees (each ray is a full line)

# Apollonian family: foci at -APOLLONIAN_FOCUS and +APOLLONIAN_FOCUS
APOLLONIAN_FOCUS = 2.0
APOLLONIAN_RATIOS = (1 / 4, 1 / 3, 1 / 2, 1, 2, 3, 4)
APOLLONIAN_PENCIL_COUNT = 6

# ======================================================================
# CONTROL POINTS
# ======================================================================

CONTROL_POINT_KEYS = ('val1', 'val2', 'val3')

# Initial mapping (identity transformation)
DEFAULT_MAPPINGS = {
    'val1': (0j, 0j),
    'val2': (5 + 0j, 5 + 0j),
    'val3': (5j, 5j),
}

# Which side of each mapping the on-canvas points edit by default
DEFAULT_EDIT_SIDE = 'out'

CONTROL_POINT_RADIUS = 6  # pixels
CONTROL_POINT_COLORS = {
    'val1': '#d9534f',
    'val2': '#5cb85c',
    'val3': '#5a8dbf',
}

# ======================================================================
# SOLVER
# ======================================================================

# A transformation whose determinant falls below this (relative to the
# squared magnitude of its entries) is treated as not existing.
SINGULAR_TOLERANCE = 1e-9

# ======================================================================
# THEMES
# ======================================================================

DEFAULT_THEME = 'dark'

THEMES = {
    'dark': {
        'background': '#141414',
        'background2': '#1f1f1f',
        'background3': '#3a3a3a',
        'foreground': '#e6e6e6',
        'foreground2': '#8fb8e0',
        'alertBackground': '#4d1f1f',
        'alertColor': '#ffb3b3',
    },
    'light': {
        'background': '#fafafa',
        'background2': '#ececec',
        'background3': '#d0d0d0',
        'foreground': '#1a1a1a',
        'foreground2': '#1f4d80',
        'alertBackground': '#fde2e2',
        'alertColor': '#8a1f1f',
    },
}

# Theme properties used by the canvas
GRIDLINE_COLOR_KEY = 'background3'  # subtle
CURVE_COLOR_KEY = 'foreground2'     # emphasis

# ======================================================================
# RENDERING
# ======================================================================

AXIS_LINE_WIDTH = 2.5
GRID_LINE_WIDTH = 1.0
CURVE_LINE_WIDTH = 1.5

# One display refresh at 60Hz; redraws are coalesced into this slot
FRAME_INTERVAL_MS = 16

# ======================================================================
# WINDOW
# ======================================================================

WINDOW_TITLE = "Mobius Visualizer"
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
SIDEBAR_WIDTH = 300

CONFIG_DIR_NAME = ".mobiusviz"
CONFIG_FILE_NAME = "config.json"
MAX_RECENT_FILES = 10
