"""
Error taxonomy for chawuek.

Construction-time errors (character map, classifier, config) abort startup.
``UnexpectedClassifierOutput`` is raised per call and is recoverable by the
caller.
"""


class ChawuekError(Exception):
    """Base class for all chawuek errors."""


class ConfigError(ChawuekError):
    """Configuration file could not be loaded or failed validation."""


class CharMapUnavailable(ChawuekError):
    """Cannot open the character map file."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        message = f"Cannot open the character map file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CharMapMalformed(ChawuekError):
    """Cannot parse the character map into key -> integer pairs."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        message = f"Cannot parse the character map: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MissingSpecialSymbol(ChawuekError):
    """A reserved symbol is missing from the character map."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot find special symbol `{name}` in the character map")


class ClassifierUnavailable(ChawuekError):
    """The classifier artifact could not be loaded."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        message = f"Cannot load the classifier: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnexpectedClassifierOutput(ChawuekError):
    """The classifier returned an invalid value."""
