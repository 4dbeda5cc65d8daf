"""Core components for network routing simulation.

This module contains the fundamental classes for the simulator, including
Device, Link, Topology, Packet, the routing strategies and the controllers
that tie them together.
"""
