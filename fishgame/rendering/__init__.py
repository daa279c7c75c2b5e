"""Image loading and built-in graphics."""
