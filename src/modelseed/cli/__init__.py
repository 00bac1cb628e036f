"""Command-line interface for modelseed."""
