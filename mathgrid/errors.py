"""Exception types raised at the engine's API boundary."""


class MathGridError(Exception):
    """Base class for engine errors."""


class InvalidBoardError(MathGridError, ValueError):
    """A board could not be built or parsed."""


class PublishError(MathGridError, ValueError):
    """An authored board is not ready to be published."""

    def __init__(self, reasons):
        self.reasons = list(reasons)
        super().__init__("; ".join(self.reasons))
