"""
Exceptions raised around the scoring engine.

The evaluator and matcher themselves never raise for malformed records; these
cover caller-side misuse such as an admin status outside the lifecycle enum.
"""


class QualificationError(Exception):
    """Base exception for qualification engine errors."""
    pass


class InvalidStatusError(QualificationError):
    """Profile status is not one of the lifecycle values."""

    def __init__(self, status: object, allowed: list[str]):
        self.status = status
        self.allowed = allowed
        super().__init__(f"Invalid status: {status!r}. Must be one of: {', '.join(allowed)}")


class RulesConfigError(QualificationError):
    """Rules override has the wrong shape."""
    pass


class StatusTransitionError(QualificationError):
    """Requested lifecycle transition is not allowed from the current status."""
    pass
