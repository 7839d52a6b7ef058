"""
Chainfall - Deterministic Rules Engine

A pure, deterministic engine for a two-player tile-placement game where
countdown tiles detonate in chain reactions. The engine provides:
- Immutable game state and seeded game setup
- Single-action turns with optional one-shot cards
- Tick, detonation cascade and end-of-game resolution
- Replay and invariant checking
"""

__version__ = "0.1.0"
