class VerificationError(Exception):
    """
    Error representing a failure while running the yield verification.
    Provides the `stage` in which the failure occurred so a report of a
    partial run can point at the step that broke.
    """

    def __init__(self, stage, message="An error occurred while verifying yield"):
        self.stage = stage
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return f"{self.message}. Failed during stage: {self.stage}"


class PreconditionError(VerificationError):
    """Raised before any deposit is issued, no state has been touched."""


class InvariantError(VerificationError):
    """
    An accounting invariant broke mid run. External state is left as is,
    the fork is disposable.
    """

    def __init__(self, stage, message, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(stage, f"{message} (expected {expected}, got {actual})")


class NoProfitError(VerificationError):
    def __init__(self, stage, profit):
        self.profit = profit
        super().__init__(stage, f"Farmer did not earn, profit was {profit} wei")


class ConfigError(Exception):
    pass
