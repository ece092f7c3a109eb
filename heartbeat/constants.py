"""Fixed constants for the heartbeat particle field."""

import math

# Type alias for RGB tuples
Color = tuple[int, int, int]

# Palette
PRIMARY_COLOR: Color = (0xA0, 0x20, 0xF0)  # purple
ACCENT_COLOR: Color = (0xFF, 0x69, 0xB4)   # pink
BACKGROUND_COLOR: Color = (0, 0, 0)
PRIMARY_PROBABILITY = 0.8

# Heart curve
IMAGE_ENLARGE = 11
TWO_PI = 2 * math.pi

# Base point generation
OUTLINE_COUNT = 1000
EDGE_PER_OUTLINE = 3
CENTER_COUNT = 4000
EDGE_BETA = 0.05
CENTER_BETA = 0.27
OUTLINE_SIZE = (1.0, 3.0)
FILL_SIZE = (1.0, 2.5)

# Force field exponents
SHRINK_EXPONENT = 0.6
PULSE_EXPONENT = 0.42
# Squared distance floor, keeps forces finite for points sitting on the center
MIN_DISTANCE_SQ = 1e-6

# Per-frame pulse
PHASE_DIVISOR = 10
PULSE_AMPLITUDE = 15
JITTER = 1.0
HALO_BASE_RADIUS = 4
HALO_RADIUS_GAIN = 6
HALO_BASE_COUNT = 1000
HALO_JITTER = 60

# Label
LABEL_TEXT = "Heart Beat"
LABEL_FONT_SIZE = 48
LABEL_FONT_FAMILIES = ("Inter-Bold.ttf", "DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf")
LABEL_SCALE_GAIN = 0.2
LABEL_BASE_OPACITY = 0.7
LABEL_OPACITY_GAIN = 0.3
GLOW_COLOR = (255, 0, 0, 0.8)
GLOW_FILL = (255, 0, 0)
CORE_FILL = (255, 220, 220)
GLOW_BLUR_INNER = 15
GLOW_BLUR_OUTER = 30

# Footer caption, drawn by the driver
CAPTION_TEXT = "DEEPLY SYNCHRONIZED PARTICLE SYSTEM"
CAPTION_FONT_SIZE = 10
CAPTION_FONT_FAMILIES = ("DejaVuSansMono.ttf", "Courier New.ttf", "cour.ttf")
CAPTION_TRACKING = 3
CAPTION_BOTTOM_MARGIN = 32
CAPTION_FILL = (255, 255, 255, 0.1)

# Driver cadence
TIME_STEP = 1 / 15
FPS = 60
