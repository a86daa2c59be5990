"""
GameHub - Game engines for a mini-game hub.

Three small, deterministic state machines (Snake, Simon, Memory) that a
presentation shell drives from the outside:
- State snapshots out
- Input events in
- Time advanced by an external clock
- Deferred actions scheduled and cancelled cooperatively
"""

__version__ = "0.1.0"
