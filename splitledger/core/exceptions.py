class SplitledgerError(ValueError):
    pass


class InvalidInputError(SplitledgerError):
    """Input that breaks a precondition of the balance engine, e.g. an expense split among nobody."""
