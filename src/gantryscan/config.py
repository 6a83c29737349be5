"""
Configuration & Global Constants
================================
This module serves as the central registry for machine geometry, scan
parameters and scene placement constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (tool length, orbit radius, world
   ranges) from being scattered throughout the kinematics and the view.
2. Consistency: The readout panel and the 3D scene read the same constants,
   so both always agree on where the tool tip is.

Exports:
    TOOL_LENGTH_OFFSET (float): Distance from the gimbal centre to the TCP.
    ZERO_EPSILON (float): Magnitudes below this are displayed as exactly 0.
    SCAN_* (float): Parameters of the demo orbit.
"""

# --- Application identity (QSettings / window title) ---
ORG_ID = "gantryscan"
APP_ID = "gantryscan"
ORG_DOMAIN = "gantryscan.local"
VISIBLE_APP_NAME = "RGB-D Scanner"
MODEL_NAME = "MODEL: V-800 // REV: 2.5.0"

# --- Kinematics ---
TOOL_LENGTH_OFFSET: float = 25.0  # mm, along the local "down" axis
ZERO_EPSILON: float = 0.001
DISPLAY_DECIMALS: int = 2
ROTATION_NOTICE_THRESHOLD: float = 0.1  # deg

# --- Auto scan (demo orbit around the figurine) ---
SCAN_FPS: int = 60
SCAN_CENTER_X: float = 50.0
SCAN_CENTER_Y: float = 50.0
SCAN_RADIUS: float = 40.0
SCAN_ANGULAR_SPEED: float = 0.5  # rad/s
SCAN_HEIGHT_BASE: float = 15.0
SCAN_HEIGHT_AMPLITUDE: float = 5.0
SCAN_HEIGHT_FREQUENCY: float = 2.0
SCAN_TILT_BASE: float = 10.0  # deg
SCAN_TILT_AMPLITUDE: float = 3.0  # deg
SCAN_TILT_FREQUENCY: float = 3.0

# --- Scene (world units, Y up) ---
WORLD_XY_RANGE: tuple[float, float] = (-4.0, 4.0)
# High machine Z lowers the head: Z=min -> 15 (top), Z=max -> 9 (bottom)
WORLD_HEAD_RANGE: tuple[float, float] = (15.0, 9.0)
GANTRY_HEIGHT: float = 16.0
FIGURINE_SCALE: float = 1.5
FIGURINE_BREATH_AMPLITUDE: float = 0.005
FIGURINE_BREATH_FREQUENCY: float = 8.0

CAMERA_POSITION: tuple[float, float, float] = (18.0, 18.0, 20.0)
CAMERA_FOCAL_POINT: tuple[float, float, float] = (0.0, 3.0, 0.0)
CAMERA_VIEW_UP: tuple[float, float, float] = (0.0, 1.0, 0.0)
CAMERA_VIEW_ANGLE: float = 40.0

BACKGROUND_COLOR = "#0f172a"
