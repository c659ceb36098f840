"""
Ludo Savannah - Turn-based Ludo engine with a room relay.

A deterministic rules engine for a four-colour Ludo variant, plus:
- A client-side driver that owns dice and delays
- An in-memory room relay that fans out actions over WebSockets
- A terminal hot-seat game
"""

__version__ = "0.1.0"
