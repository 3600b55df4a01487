"""LED pattern controller for router chassis faceplates: cards, patterns, outputs and API."""

__version__ = "0.1.0"