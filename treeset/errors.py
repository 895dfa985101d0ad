"""Exception hierarchy for TreeSet.

Every set operation is total over well-typed input, so these exceptions cover
misuse of the surrounding surface (configuration, collectors, mixing orderings)
and the optional invariant checks.
"""


class TreeSetError(Exception):
    """Base class for all TreeSet errors."""
    pass


class ConfigurationError(TreeSetError, ValueError):
    """Raised when a TreeSetConfig fails validation."""
    pass


class OrderingMismatchError(TreeSetError, ValueError):
    """Raised when two sets ordered by different key functions are merged."""
    pass


class InvariantViolationError(TreeSetError):
    """Raised when invariant checking is enabled and a tree is corrupt.

    The usual cause is building with ``already_sorted=True`` from input that
    was not actually sorted and deduplicated.
    """

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class CollectorClosedError(TreeSetError):
    """Raised when a collector is used after done() or halt()."""
    pass
