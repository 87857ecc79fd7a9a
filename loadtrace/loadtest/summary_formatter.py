"""Renders aggregate statistics as a text table."""
from typing import List, Optional, Tuple

from .constants import LoadTestConstants
from .models import AggregateStats, PhaseStats

LABEL_WIDTH = 32


def _format_ms(value: Optional[float]) -> str:
    if value is None:
        return LoadTestConstants.NOT_APPLICABLE
    return f"{value:.2f}ms"


def _label(name: str) -> str:
    return f" {name}".ljust(LABEL_WIDTH, ".") + ":"


class SummaryFormatter:
    """Formats AggregateStats; the TLS row is present only for HTTPS targets."""

    @staticmethod
    def phase_rows(stats: AggregateStats) -> List[Tuple[str, PhaseStats]]:
        rows = [
            ("DNS Lookup", stats.dns_lookup),
            ("TCP Connect", stats.tcp_connection),
        ]
        if stats.tls_handshake is not None:
            rows.append(("TLS Handshake", stats.tls_handshake))
        rows.append(("Server Processing", stats.server_processing))
        rows.append(("Content Transfer", stats.content_transfer))
        return rows

    @classmethod
    def render(cls, stats: AggregateStats) -> str:
        lines = [""]
        for name, phase in cls.phase_rows(stats):
            lines.append(
                f"{_label(name)} Avg/mean={_format_ms(phase.mean)}\t"
                f"Median={_format_ms(phase.median)}\tp(95)={_format_ms(phase.p95)}"
            )
        lines.append("")
        lines.append("Summary:")
        lines.append(f"{_label('Total Req.')} {stats.total_requests}")
        lines.append(f"{_label('Failed Req.')} {stats.failed_requests}")
        lines.append(f"{_label('Elapsed')} {stats.elapsed_seconds:.3f}s")
        lines.append(f"{_label('Req/s')} {stats.requests_per_second:.2f}")
        lines.append("")
        return "\n".join(lines)
