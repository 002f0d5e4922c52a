"""Role-based task and team management backend."""

__version__ = "1.0.0"
