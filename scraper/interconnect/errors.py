"""Errors raised by the interconnect engine."""

from typing import Optional


class InvariantViolation(RuntimeError):
    """
    A device-model assumption or an engine invariant does not hold

    Never recovered from: the computation that raised it has no valid result.
    """

    def __init__(self, message: str, junction: Optional[str] = None, region: Optional[str] = None):
        self.junction = junction
        self.region = region
        context = []
        if junction is not None:
            context.append(f"junction={junction}")
        if region is not None:
            context.append(f"region={region}")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)
