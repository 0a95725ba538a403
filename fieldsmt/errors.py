class SMTError(ValueError):
    """Base class for every error raised by fieldsmt."""


class InvalidInput(SMTError):
    """A key, value, root or sibling path violates the caller contract."""


class RootMismatch(SMTError):
    """The root recomputed from a sibling path differs from the claimed one.

    Deterministic: calling again with the same inputs fails the same way.
    A caller recovers by fetching a fresh sibling path for the current root.
    """

    def __init__(self, operation, expected, computed):
        self.operation = operation
        self.expected = expected
        self.computed = computed
        super().__init__(
            f"{operation}: root mismatch, expected {expected}, computed {computed}"
        )
