"""
GloveSense Errors.
Raised while loading definition files and while accepting pose samples.
"""
from typing import Optional


class MalformedDefinitionError(ValueError):
    """
    A position or motion definition file contains bad syntax or semantics.

    Attributes:
        path: The definition file, when known.
        line_number: 1-based line of the offending record, -1 when unknown.
    """

    def __init__(self, message: str, path: Optional[str] = None, line_number: int = -1):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None
        self.line_number = line_number

    def __str__(self):
        rv = self.message
        if self.line_number >= 0:
            rv += f" (line {self.line_number})"
        if self.path:
            rv += f" in {self.path}"
        return rv


class InvalidSampleError(ValueError):
    """A pose sample did not contain exactly one value per joint."""
