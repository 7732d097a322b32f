"""Release-train tooling for multi-repository project families."""

__version__ = "0.3.0"
