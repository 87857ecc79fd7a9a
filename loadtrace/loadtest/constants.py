"""Constants for the load testing core."""


class LoadTestConstants:
    """Centralized constants for load test execution."""
    PLACEHOLDER_TOKEN = "a"
    MS_PER_SECOND = 1000.0
    PERCENTILE = 95
    SUCCESS_STATUS_MIN = 200
    SUCCESS_STATUS_MAX = 299
    NOT_APPLICABLE = "N/A"
