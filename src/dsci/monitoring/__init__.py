from dsci.monitoring.console import emit_error, emit_lines, emit_warning
from dsci.monitoring.logging import configure_logging
from dsci.monitoring.metrics import ValidationMetrics

__all__ = [
    "configure_logging",
    "emit_error",
    "emit_lines",
    "emit_warning",
    "ValidationMetrics",
]
