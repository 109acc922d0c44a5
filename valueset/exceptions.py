class InvalidIndexError(RuntimeError):
    """
    Raised when an iterator or `SetIndex` is used after its owning set was mutated,
    or with a set other than the one that produced it
    """
