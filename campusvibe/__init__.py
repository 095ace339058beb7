"""Campus Vibe: live crowd vibe and geofenced check-ins for campus events."""

__version__ = "1.0.0"
