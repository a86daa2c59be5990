"""
Games module - One subpackage per mini-game.

Each game has:
- State: immutable snapshot types
- Config: pydantic model for the settings a shell may pass
- Engine: the GameEngine subclass that owns and mutates the state

The games share no runtime state with each other.
"""
