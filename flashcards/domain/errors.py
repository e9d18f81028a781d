class InvalidArgument(ValueError):
    """Raised for an out-of-range score or a review state that breaks its own invariants."""


class FlashcardNotFound(LookupError):
    pass


class SubjectProgressNotFound(LookupError):
    pass
