"""Runners that drive the engine frame by frame."""
