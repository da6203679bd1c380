"""
Error kinds raised while reconstructing a traverse.

Every error aborts the traverse evaluation it occurs in. None of them is
caught inside the library; the caller decides how to present it.
"""


class TraverseError(Exception):
    """Base class for all traverse evaluation failures."""


class FormatError(TraverseError, ValueError):
    """An angle or bearing string does not match the required grammar."""


class UnknownDirectionError(TraverseError, ValueError):
    """A line or arc direction is neither TRUE nor FALSE."""


class MissingContextError(TraverseError):
    """A call needs prior points that have not been established yet."""


class UnresolvedSymbolError(TraverseError, LookupError):
    """A symbol reference names a variable that has not been bound."""

    def __init__(self, name: str):
        super().__init__(f"Unresolved symbol: ${name}")
        self.name = name


class UnknownFunctionError(TraverseError, LookupError):
    """A function record names a function absent from the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown function: {name}")
        self.name = name


class FunctionArgumentError(TraverseError, TypeError):
    """A function record passes arguments its function cannot accept."""


class UnknownRecordTypeError(TraverseError, TypeError):
    """A record's kind is not one of the recognized variants."""


class RecordFileError(TraverseError, ValueError):
    """A record file line cannot be mapped to a record.

    Attributes
    ----------
    line_number : int or None
        1-based line number in the source file, when known.
    """

    def __init__(self, message: str, line_number: int = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
