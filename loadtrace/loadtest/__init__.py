"""Load test package initialization."""
from .models import LoadTestConfig, DurationMetrics, PhaseStats, AggregateStats, WorkToken
from .constants import LoadTestConstants
from .exceptions import LoadTestError, ConfigurationError, SuffixFileError, LoadTestExecutionError
from .request_tracer import RequestTrace, ResolvingBackend
from .transport import TracingTransport
from .client_manager import ClientManager
from .request_executor import RequestExecutor
from .dispatcher import Dispatcher
from .progress import ProgressCounter, ProgressLogger
from .concurrency_manager import ConcurrencyManager
from .latency_analyzer import LatencyAnalyzer
from .suffix_loader import SuffixLoader
from .summary_formatter import SummaryFormatter
from .load_tester import LoadTester
from .runner import LoadTestRunner

__all__ = [
    'LoadTestConfig',
    'DurationMetrics',
    'PhaseStats',
    'AggregateStats',
    'WorkToken',
    'LoadTestConstants',
    'LoadTestError',
    'ConfigurationError',
    'SuffixFileError',
    'LoadTestExecutionError',
    'RequestTrace',
    'ResolvingBackend',
    'TracingTransport',
    'ClientManager',
    'RequestExecutor',
    'Dispatcher',
    'ProgressCounter',
    'ProgressLogger',
    'ConcurrencyManager',
    'LatencyAnalyzer',
    'SuffixLoader',
    'SummaryFormatter',
    'LoadTester',
    'LoadTestRunner'
]
