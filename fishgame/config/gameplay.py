"""Gameplay tunables for the tank scene."""

# The tank occupies the bottom 80% of the scene; taps above it drop food
TANK_HEIGHT_FRACTION = 0.8

# Background image placement as fractions of the scene size
BACKGROUND_CENTER_Y_FRACTION = 0.4

# Fish wander: random offset per axis and move cadence, in points and seconds
FISH_WANDER_RANGE = 100.0
FISH_MOVE_DURATION = 1.0
FISH_MOVE_INTERVAL = 1.0

# Food falls at a constant speed in points per second
FOOD_FALL_SPEED = 100.0

# Heart marker fade-out, in seconds
HEART_FADE_DURATION = 0.5

# Action keys
WANDER_ACTION_KEY = "wander"
FISH_MOVE_ACTION_KEY = "fish_move"
