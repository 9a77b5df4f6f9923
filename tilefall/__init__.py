"""
Tilefall - Last-Player-Standing Platform Engine

A deterministic, step-driven rules engine for a turn-based grid game where
the platform shrinks every turn. The engine provides:
- Platform graph with connectivity-safe tile instability
- Legal move generation
- Simultaneous move execution with collision resolution
- Bot policies for automated opponents
- A turn state machine and session API for presentation layers
"""

__version__ = "0.1.0"
