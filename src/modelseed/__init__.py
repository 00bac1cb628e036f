"""modelseed: dependency-aware synthetic records for agent data models."""

__version__ = "0.1.0"
