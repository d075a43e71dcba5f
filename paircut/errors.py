"""Exceptions raised by paircut."""


class DecompositionError(AssertionError):
    """A pairwise reduction ended in a state its algorithm rules out.

    This signals a defect in the reduction itself, not bad input, and is
    not meant to be caught.
    """
