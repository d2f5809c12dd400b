"""Exceptions raised by the statistics and normalization core."""


class ImageNormError(Exception):
    """Base class for all imgnorm errors."""


class UnsupportedEncodingError(ImageNormError, TypeError):
    """Operation invoked on a pixel encoding or layout it does not implement."""


class UnsupportedConversionError(ImageNormError, ValueError):
    """No conversion policy entry for the requested source/target pair."""


class InvalidArgumentError(ImageNormError, ValueError):
    """A precondition on an argument was violated."""


class InternalInconsistencyError(ImageNormError, RuntimeError):
    """An assumption about a library primitive did not hold."""
