"""Topology generation for network simulation.

This module provides functions for building line, ring, star and random
mesh topologies.
"""
