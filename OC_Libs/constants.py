"""
Constants and configuration values for Open Cutout.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the editor.
"""

# Brush constants
MIN_BRUSH_SIZE = 5
MAX_BRUSH_SIZE = 100
DEFAULT_BRUSH_SIZE = 20
MIN_BRUSH_HARDNESS = 0
MAX_BRUSH_HARDNESS = 100
DEFAULT_BRUSH_HARDNESS = 100
MIN_BRUSH_OPACITY = 1
MAX_BRUSH_OPACITY = 100
DEFAULT_BRUSH_OPACITY = 100

# Brush tools
TOOL_ERASE = "erase"
TOOL_RESTORE = "restore"
SUPPORTED_TOOLS = (TOOL_ERASE, TOOL_RESTORE)
DEFAULT_TOOL = TOOL_ERASE

# Stamp every 10% of the brush size while interpolating a stroke
STROKE_SPACING_FACTOR = 0.1

# History
DEFAULT_HISTORY_CAPACITY = 20

# View / zoom
VIEW_MODE_FIT = "fit"
VIEW_MODE_CUSTOM = "custom"
ZOOM_STEP = 0.25
MIN_ZOOM = 0.25
MAX_ZOOM = 3.0
DEFAULT_ZOOM = 1.0

# Session phases
PHASE_VIEWING = "viewing"
PHASE_EDITING = "editing"

# Background types
BACKGROUND_TRANSPARENT = "transparent"
BACKGROUND_COLOR = "color"
BACKGROUND_GRADIENT = "gradient"
BACKGROUND_IMAGE = "image"

# Gradient presets offered by the background picker
GRADIENT_PRESETS = {
    "sunset": ("#ff7e5f", "#feb47b"),
    "mint": ("#43e97b", "#38f9d7"),
    "ocean": ("#00c6ff", "#0072ff"),
    "fire": ("#f83600", "#f9d423"),
}
DEFAULT_GRADIENT_DIRECTION = "to right"
GRADIENT_DIRECTION_ANGLES = {
    "to top": 0.0,
    "to right": 90.0,
    "to bottom": 180.0,
    "to left": 270.0,
}

# Swatches offered next to the color picker
COLOR_SWATCHES = ("#ffffff", "#000000", "#ff0000")

# Transparent preview checkerboard
CHECKER_LIGHT_COLOR = "#ffffff"
CHECKER_DARK_COLOR = "#cccccc"
CHECKER_SQUARE_SIZE = 8

# Export
DEFAULT_FLATTEN_COLOR = "#ffffff"
DEFAULT_EXPORT_FORMAT = "PNG"
DEFAULT_EXPORT_BASENAME = "removed-bg"
DEFAULT_JPEG_QUALITY = 95
EXPORT_FORMAT_ALIASES = {
    "PNG": "PNG",
    "JPG": "JPEG",
    "JPEG": "JPEG",
}
EXPORT_FORMAT_EXTENSIONS = {
    "PNG": ".png",
    "JPEG": ".jpg",
}

# Upload validation
SUPPORTED_UPLOAD_IMAGES = {".png", ".jpg", ".jpeg", ".webp"}
SUPPORTED_UPLOAD_FORMATS = {"PNG", "JPEG", "WEBP"}
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
