"""
Activity log exceptions.

Recording is lenient by default: a disabled log, unknown contragent input and
unresolved placeholders are not errors. The exceptions below cover the cases
where carrying on would record something wrong.
"""


class ActivityLogError(Exception):
    """Base exception for all activity log errors."""
    pass


class CouldNotLogActivity(ActivityLogError):
    """Raised when an activity cannot be recorded as requested."""
    pass


class CouldNotDetermineActor(CouldNotLogActivity):
    """
    Raised when an identifier passed to ``caused_by`` does not resolve to a user.

    Example:
        >>> activity().caused_by(42)
        CouldNotDetermineActor: Could not determine a user with identifier `42`.
    """

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Could not determine a user with identifier `{identifier}`.")


class InvalidConfiguration(ActivityLogError):
    """Raised when the configured activity model is unusable."""
    pass
