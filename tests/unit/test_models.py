"""Unit tests for load test data models."""

import pytest

from loadtrace.loadtest import ConfigurationError, DurationMetrics, LoadTestConfig, LoadTestConstants
from ..test_const import (
    HTTP_ERROR, HTTP_NO_CONTENT, HTTP_NOT_FOUND, HTTP_REDIRECT, HTTP_SUCCESS, NO_RESPONSE,
    TEST_CONCURRENCY, TEST_HTTP_URL, TEST_HTTPS_URL, TEST_REQUESTS, TEST_SUFFIXES,
)


class TestLoadTestConfig:
    """Test LoadTestConfig validation and derived values."""

    def test_count_mode(self):
        config = LoadTestConfig(base_url=TEST_HTTP_URL, concurrency=TEST_CONCURRENCY, requests=TEST_REQUESTS)
        assert config.file_mode is False
        assert config.total_requests == TEST_REQUESTS
        assert config.tokens() == [LoadTestConstants.PLACEHOLDER_TOKEN] * TEST_REQUESTS

    def test_file_mode_overrides_request_count(self):
        """Test the suffix list length replaces the request count."""
        config = LoadTestConfig(base_url=TEST_HTTP_URL, concurrency=2, requests=1000, url_suffixes=TEST_SUFFIXES)
        assert config.file_mode is True
        assert config.total_requests == len(TEST_SUFFIXES)
        assert config.tokens() == TEST_SUFFIXES

    def test_suffix_list_is_copied(self):
        suffixes = list(TEST_SUFFIXES)
        config = LoadTestConfig(base_url=TEST_HTTP_URL, url_suffixes=suffixes)
        suffixes.append("/late")
        assert config.total_requests == len(TEST_SUFFIXES)

    def test_tls_flag_from_scheme(self):
        assert LoadTestConfig(base_url=TEST_HTTPS_URL).is_tls is True
        assert LoadTestConfig(base_url=TEST_HTTP_URL).is_tls is False

    @pytest.mark.parametrize("url", ["", "example.test", "ftp://example.test", "http://"])
    def test_invalid_url(self, url):
        with pytest.raises(ConfigurationError):
            LoadTestConfig(base_url=url)

    @pytest.mark.parametrize("concurrency", [0, -1, True, 2.5, "4"])
    def test_invalid_concurrency(self, concurrency):
        with pytest.raises(ConfigurationError):
            LoadTestConfig(base_url=TEST_HTTP_URL, concurrency=concurrency)

    @pytest.mark.parametrize("requests", [0, -5, None])
    def test_invalid_request_count(self, requests):
        with pytest.raises(ConfigurationError):
            LoadTestConfig(base_url=TEST_HTTP_URL, requests=requests)

    def test_empty_suffix_list(self):
        with pytest.raises(ConfigurationError):
            LoadTestConfig(base_url=TEST_HTTP_URL, url_suffixes=[])


class TestDurationMetrics:
    """Test DurationMetrics status classification."""

    @pytest.mark.parametrize("status_code, succeeded", [
        (HTTP_SUCCESS, True),
        (HTTP_NO_CONTENT, True),
        (HTTP_REDIRECT, False),
        (HTTP_NOT_FOUND, False),
        (HTTP_ERROR, False),
        (NO_RESPONSE, False),
    ])
    def test_succeeded(self, status_code, succeeded):
        assert DurationMetrics(status_code=status_code).succeeded is succeeded

    def test_responded(self):
        assert DurationMetrics(status_code=HTTP_ERROR).responded is True
        assert DurationMetrics(status_code=NO_RESPONSE, error="refused").responded is False

    def test_immutable(self):
        record = DurationMetrics(status_code=HTTP_SUCCESS)
        with pytest.raises(AttributeError):
            record.status_code = HTTP_ERROR
