"""Road network construction, route search and map viewing."""

__version__ = "0.1.0"
__all__ = ["geometry", "network", "routing", "cli", "viewer"]