class TaskError(Exception):
    """Base class for errors raised by the task core."""


class ValidationError(TaskError):
    """Caller supplied data that breaks a business rule. Never touches storage."""


class PersistenceError(TaskError):
    """The backing store failed or returned an unexpected outcome."""


class ConfigurationError(Exception):
    """Settings could not be loaded at process start."""
