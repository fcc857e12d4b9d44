"""
Warnings emitted during the spindle flow.
"""


class UnsupportedOperationWarning(Warning):
    """Warn about an operation not yet implemented or unsupported according to context."""
    pass


class MissingParameterWarning(Warning):
    """Warn about an expected but missing parameter."""
    pass


class UnsupportedInputValueWarning(Warning):
    """Warn about an execution input value of unknown structure that was omitted from the decoded definitions."""
