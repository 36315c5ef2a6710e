class StaticFilesError(Exception):
    """Base exception for static file serving."""


class StaticConfigurationError(StaticFilesError):
    """Raised when static file options are invalid."""


class StaticFileReadError(StaticFilesError):
    """Raised when probing or reading a file fails for a reason other than absence."""
