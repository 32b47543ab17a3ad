"""Service-layer exceptions."""


class DialogueInvariantError(RuntimeError):
    """Raised when the sequencer is driven into a state its design rules out."""


class AssignmentError(ValueError):
    """Raised when a roller assignment request is invalid."""
