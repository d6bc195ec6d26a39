from __future__ import annotations


class ParseError(ValueError):
    """Raised when text cannot be parsed in the ``.osu`` format."""


class UnknownKeyError(ParseError):
    """Raised when a key-value section holds a key that is not in its schema.

    Parameters
    ----------
    section : str
        The section the key appeared in.
    key : str
        The offending key.
    """

    def __init__(self, section: str, key: str) -> None:
        super().__init__(f"unknown key {key!r} in section {section!r}")
        self.section = section
        self.key = key


class UnsupportedModeError(NotImplementedError):
    """Raised when a calculation is requested for a game mode that has no
    implementation.
    """


class InvalidInputError(ValueError):
    """Raised when a calculation is given out of range play statistics."""
