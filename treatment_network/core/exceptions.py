"""
Engine Exceptions
"""


class InvalidInput(ValueError):
    """
    Raised when caller-supplied data violates an engine precondition.

    Covers empty comparison lists, fewer than two treatment effects,
    negative standard errors and malformed records. These are deterministic
    validation failures: retrying with the same input fails the same way.
    """
