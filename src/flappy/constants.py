"""
constants.py: Centralized tuning for the simulation and the pygame shell.
"""

# -------- Play Field Config --------
FIELD_WIDTH = 420
FIELD_HEIGHT = 760
WINDOW_MARGIN = 20              # Window is min(desktop - margin, field size)

# -------- Time Config --------
RENDER_FPS = 60
STEP_MS = 1000.0 / RENDER_FPS   # Fixed simulation step (per-step constants are tuned for 60 Hz)

# -------- Actor Config --------
ACTOR_X = 60                    # Fixed actor X position
ACTOR_WIDTH = 100
ACTOR_HEIGHT = 100
RESET_Y_FRACTION = 0.45         # Reset y as a fraction of field height

# -------- Physics Config (pixels / step) --------
GRAVITY = 0.28                  # Added to velocity every step once armed
JUMP_IMPULSE = -5.0             # Velocity set on every activation

# -------- Obstacle Config --------
OBSTACLE_WIDTH = 80
OBSTACLE_GAP = 260
OBSTACLE_SPEED = 2.6            # Pixels per step
SPAWN_INTERVAL_MS = 2000.0
SPAWN_OFFSET_X = 20             # Spawned just past the right edge
GAP_MARGIN_TOP = 60
GAP_MARGIN_BOTTOM = 90
PRUNE_MARGIN = 20               # Pruned once the right edge is this far past x=0

# -------- Episode Config --------
RESTART_DELAY_MS = 3000.0

# -------- Shell Colours --------
SKY_TOP = (0xFF, 0xB3, 0x7B)
SKY_MIDDLE = (0xFF, 0x7E, 0x5F)
SKY_BOTTOM = (0x7B, 0x2C, 0xBF)
PIPE_COLOR = (0x0B, 0x66, 0x23)
ACTOR_COLOR = (255, 215, 0)
WHITE = (255, 255, 255)
