"""Error kinds raised by the engine and the move policy.

Both indicate a caller/engine state mismatch and are raised immediately.
"""


class IllegalMove(ValueError):
    """Index out of range, cell occupied, bad mark, or move out of turn."""


class NoLegalMove(RuntimeError):
    """The policy was asked for a move on a full board."""
