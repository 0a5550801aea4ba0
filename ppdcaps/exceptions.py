"""Exceptions raised by ppdcaps."""


class PPDError(Exception):
    """Base error for PPD handling."""

    pass


class PPDParseError(PPDError):
    """Input text is not a PPD document at all."""

    pass


class PPDSourceError(PPDError):
    """Error while reading a PPD from a file or from CUPS."""

    pass
