"""Geometry conversion helpers."""
