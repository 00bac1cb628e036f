"""Utility modules for modelseed."""
