"""Route progress and proximity engine for location-based scavenger hunts."""

__version__ = "0.1.0"
