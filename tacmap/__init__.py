"""Deterministic tactical battle-map generation."""
