"""Load test runner to orchestrate a run and report its summary."""
import logging
import sys
from typing import Optional, TextIO

from loadtrace.shared.config import Config
from .models import AggregateStats, LoadTestConfig
from .load_tester import LoadTester
from .progress import ProgressLogger
from .summary_formatter import SummaryFormatter


# Configure logging
logger = logging.getLogger(__name__)


class LoadTestRunner:
    """Orchestrates a load test run and writes its summary."""

    def __init__(self, config: LoadTestConfig, settings: Optional[Config] = None, output: Optional[TextIO] = None):
        self.config = config
        self.settings = settings if settings is not None else Config()
        self.output = output if output is not None else sys.stdout
        self.load_tester = LoadTester(config, self.settings, ProgressLogger(self.settings.progress_log_step))

    def run(self) -> AggregateStats:
        """Run the load test and write the summary table."""
        try:
            stats = self.load_tester.run()
            self.output.write(SummaryFormatter.render(stats))
            self.output.flush()
            logger.info("Load test completed successfully!")
            return stats
        except Exception as e:
            logger.error(f"Load test failed: {e}", stack_info=True)
            raise
