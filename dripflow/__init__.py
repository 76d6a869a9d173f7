"""In-memory drip sequence flow editor: blocks, steps, triggers and enrolled customers."""

__version__ = "0.1.0"
