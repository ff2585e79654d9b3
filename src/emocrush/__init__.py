"""Tile-matching puzzle engine and its in-process orchestration layer."""
