"""
Exceptions raised by ScoreLink.
"""

class ScoreLinkError(Exception):
    """Base class for all ScoreLink errors."""

class ConfigError(ScoreLinkError):
    """A configuration or exam file could not be loaded."""

class LinkGenerationError(ScoreLinkError):
    """A share token could not be built from the exam."""

class LinkDecodeError(ScoreLinkError):
    """A share token is invalid or corrupted."""
