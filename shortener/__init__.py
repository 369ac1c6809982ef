"""URL shortener: short-code allocation over a uniqueness-constrained store."""

__version__ = "0.1.0"
