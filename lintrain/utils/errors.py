# lintrain/utils/errors.py


class LintrainError(RuntimeError):
    """
    Base class for every error raised by lintrain itself.
    """


class ConfigurationError(LintrainError, ValueError):
    """
    Raised for invalid user-provided options (unknown family, bad value,
    incompatible model/optimizer pairing, bad category set).

    Always raised at trainer construction, before any data is touched.
    """


class OverrideParseError(ConfigurationError):
    """
    Raised when a class sampling override (inline or file) cannot be parsed
    or the override file cannot be read.
    """


class ModelStateError(LintrainError):
    """
    Raised when a model is used outside its lifecycle
    (e.g. updating a finalized model).
    """
