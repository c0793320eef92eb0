"""
Configuration for wall segmentation and room reporting.
"""

# Geometry tolerances (plan length units, feet for host documents)
EPSILON = 1e-3  # Two points closer than this are the same point
MIN_SEGMENT_LENGTH = EPSILON  # Rebuilt pieces shorter than this are dropped
PARALLEL_TOLERANCE = 1e-9  # |sin(angle)| below this means parallel lines

# Wall defaults
DEFAULT_WALL_HEIGHT = 10.0  # ft, used when the plan carries no height
DEFAULT_WALL_TYPE = "Generic"
DEFAULT_LEVEL = "Level 1"

# Report
REPORT_FILENAME = "RoomWallAreas.csv"
REPORT_HEADER = (
    "Room Number",
    "Room Name",
    "Wall Id",
    "Wall Length (ft)",
    "Wall Area (sqft)",
    "Wall Orientation",
)
REPORT_FLOAT_FORMAT = "%.2f"
REPORT_MIN_WALL_LENGTH = 0.1  # ft, shorter bounding walls are left out of the report

# Child wall ids are "<parent>.<n>"
CHILD_ID_SEPARATOR = "."

# Image output
WALL_WIDTH = 2  # Line width of walls
WALL_COLOR = "#000000"
CHILD_WALL_COLOR = "#1f77b4"  # Walls created by a split
SPLIT_POINT_COLOR = "#FF1493"
SPLIT_POINT_MARKER_SIZE = 6
IMAGE_DPI = 140
