from __future__ import annotations


class LearnError(Exception):
    """Input-validation failure reported to the sketch author."""

    prefix = "learnsketch says"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        if not self.message:
            return self.prefix
        return f"{self.prefix}: {self.message}"
