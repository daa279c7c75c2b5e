"""Display and asset configuration constants."""

# Screen dimensions in pixels (portrait, like a phone held upright)
SCREEN_WIDTH = 400
SCREEN_HEIGHT = 700

# The frame rate for the game loop, in frames per second
FRAME_RATE = 60

WINDOW_TITLE = "FishGame"

# Scene background colour behind the tank image
BACKGROUND_COLOR = (255, 255, 255)

# Named image resources consumed by the game scene
IMAGE_BACKGROUND = "BG"
IMAGE_FISH = "NEMO"
IMAGE_FOOD = "FOOD"
IMAGE_HEART = "HEART"

# Directory searched for <name>.png overrides of the built-in graphics
ASSETS_DIR = "images"

# Z ordering
BACKGROUND_Z = -100
FISH_Z = 100
