"""FishGame: feed a wandering fish in a pygame tank."""

__version__ = "0.1.0"
