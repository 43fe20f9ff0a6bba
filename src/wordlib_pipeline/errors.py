"""Exception types raised while decoding dictionary files.

IO failures are not wrapped: ``OSError`` subclasses such as
``FileNotFoundError`` reach the caller unmodified, so they stay
distinguishable from the format errors below.
"""

from __future__ import annotations


class ScelError(ValueError):
    """Base class for fatal SCEL format errors."""


class FormatMismatchError(ScelError):
    """The buffer is not a SCEL file: too short or wrong magic signature."""


class BinaryParseError(ScelError):
    """A structural inconsistency the local recovery policies cannot absorb."""
