class MorfessorException(Exception):
    """Base class for exceptions in this module."""
    pass


class ArgumentException(MorfessorException):
    """Exception in command line argument parsing or model configuration."""
    pass


class InvariantViolation(MorfessorException):
    """Raised when a caller breaks a precondition of the segmentation tree
    or the cost model.

    These are programming errors; the structure is never corrected
    silently, because that would hide a cost-accounting bug.
    """
    pass


class MorphNotFoundError(MorfessorException, KeyError):
    """Raised when a morph is looked up that is not in the tree."""

    def __init__(self, morph):
        super(MorphNotFoundError, self).__init__(
            "Morph '%s' is not in the segmentation tree" % morph)
        self.morph = morph

    def __str__(self):
        return self.args[0]
