"""Utilities for network simulation, including topology serialization."""
