"""Dependency-aware record generation."""
