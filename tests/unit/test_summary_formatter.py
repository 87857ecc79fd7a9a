"""Unit tests for the summary table."""

import pytest

from loadtrace.loadtest import AggregateStats, PhaseStats, SummaryFormatter


def _stats(tls=None):
    phase = PhaseStats(mean=12.5, median=10.0, p95=40.25, samples=10)
    return AggregateStats(
        dns_lookup=PhaseStats(),
        tcp_connection=phase,
        tls_handshake=tls,
        server_processing=phase,
        content_transfer=phase,
        total_requests=100,
        failed_requests=3,
        requests_per_second=250.0,
        elapsed_seconds=0.4,
        is_tls=tls is not None,
    )


class TestSummaryFormatter:
    """Test table rendering."""

    def test_plain_http_table(self):
        table = SummaryFormatter.render(_stats())
        assert "TLS Handshake" not in table
        assert " TCP Connect" in table
        assert "Avg/mean=12.50ms" in table
        assert "Median=10.00ms" in table
        assert "p(95)=40.25ms" in table

    def test_tls_row(self):
        table = SummaryFormatter.render(_stats(tls=PhaseStats(mean=3.0, median=2.0, p95=9.0, samples=4)))
        assert "TLS Handshake" in table
        assert "p(95)=9.00ms" in table

    def test_not_applicable_values(self):
        table = SummaryFormatter.render(_stats())
        dns_line = next(line for line in table.splitlines() if "DNS Lookup" in line)
        assert dns_line.count("N/A") == 3

    def test_summary_fields(self):
        lines = SummaryFormatter.render(_stats()).splitlines()
        assert any(line.startswith(" Total Req.") and line.endswith(" 100") for line in lines)
        assert any(line.startswith(" Failed Req.") and line.endswith(" 3") for line in lines)
        assert any(line.startswith(" Req/s") and line.endswith(" 250.00") for line in lines)

    @pytest.mark.parametrize("tls", [None, PhaseStats()])
    def test_phase_row_order(self, tls):
        names = [name for name, _ in SummaryFormatter.phase_rows(_stats(tls))]
        expected = ["DNS Lookup", "TCP Connect", "Server Processing", "Content Transfer"]
        if tls is not None:
            expected.insert(2, "TLS Handshake")
        assert names == expected
