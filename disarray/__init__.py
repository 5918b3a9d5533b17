"""Game toolkit: matrices, collision tests, TGA images, particles, mesh models and headless sample game rules."""

__version__ = "0.1.0"