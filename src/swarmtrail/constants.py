# --- Configuration Constants ---
DEFAULT_FPS = 30
DEFAULT_RESOLUTION = (640, 480)
DEFAULT_DURATION = 10  # seconds of rendered video
POLL_INTERVAL = 0.05  # seconds between target detections (decoupled from fps)

# Particle system settings
PARTICLES_PER_TARGET = 100
SPAWN_JITTER = 10  # particles start within +/- this many pixels of the target

# Particle physics
ACCELERATION = 0.5
MAX_SPEED = 3.0
MIN_SPEED = 1.0
SPEED_FLOOR = 1.0  # used when the min speed clamp is disabled
FRICTION = 0.99  # multiplicative decay per tick
PARTICLE_RADIUS = 3.0
STEER_SMOOTHING = 0.05  # fraction of the heading error corrected per tick

# Trail settings
TRAIL_OPACITY = 0.5
TRAIL_OPACITY_STEP = 0.02
TRAIL_RADIUS_STEP = 0.0  # > 0 makes trails shrink as they fade

# Flocking (boid) settings
NEIGHBOURHOOD_RADIUS = 30.0
COHESION_WEIGHT = 1.0
SEPARATION_WEIGHT = 1.5
ALIGNMENT_WEIGHT = 1.0
FLOCK_HEADING_BLEND = 0.02
FLOCK_SPEED_GAIN = 0.05

# Rendering
BACKGROUND_DIM = 0.65  # 0.0 = background untouched, 1.0 = black
DEBUG_LINE_COLOR = (50, 50, 255)  # RGB
DEBUG_MARKER_COLOR = (255, 0, 0)  # RGB
DEBUG_MARKER_RADIUS = 3

# Colours ("r, g, b" strings, as handed out per tracked point)
DEFAULT_COLOR = "255, 155, 50"
FINGERTIP_COLORS = {
    "pinky_finger_tip": "255, 155, 50",
    "ring_finger_tip": "155, 255, 50",
    "middle_finger_tip": "50, 155, 255",
    "index_finger_tip": "255, 50, 155",
    "thumb_tip": "155, 50, 255",
}
