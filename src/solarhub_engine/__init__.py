"""SolarHub daily household energy forecast engine."""

__version__ = "0.1.0"
