# src/season_color/errors.py
"""
Error taxonomy for the color engine.

Every error is local and recoverable: the caller (capture UI, batch driver)
is expected to catch it and either re-sample or show a retry prompt.
Conversion functions never raise for finite input; they clamp instead.
"""


class ColorEngineError(ValueError):
    """Base class for all engine errors."""


class InvalidInputError(ColorEngineError):
    """A channel is non-finite or outside its declared range."""


class UnsupportedConversionError(ColorEngineError):
    """No registered conversion path exists for a (from, to) pair."""

    def __init__(self, from_space, to_space):
        self.from_space = from_space
        self.to_space = to_space
        super().__init__(f"Conversion from {from_space} to {to_space} is not supported")


class EmptyInputError(ColorEngineError):
    """An aggregate call received zero samples."""


class ReferenceDataMissingError(ColorEngineError):
    """The palette has no reference points for a requested season."""

    def __init__(self, season: str):
        self.season = season
        super().__init__(f"No reference points loaded for season '{season}'")
