"""Custom exceptions for the load testing system."""


class LoadTestError(Exception):
    """Base exception for load test failures."""
    pass


class ConfigurationError(LoadTestError):
    """Exception raised when the run configuration is invalid."""
    pass


class SuffixFileError(ConfigurationError):
    """Exception raised when the URL suffix file cannot be read."""
    pass


class LoadTestExecutionError(LoadTestError):
    """Exception raised when a run does not complete as expected."""
    pass
