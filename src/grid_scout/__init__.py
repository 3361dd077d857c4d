"""Grid Scout - esports scouting analytics."""

__version__ = "0.1.0"
