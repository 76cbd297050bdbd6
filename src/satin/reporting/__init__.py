from satin.reporting.plots import maybe_plot_gain_curves
from satin.reporting.report import format_row, render_report, write_report
from satin.reporting.summary import build_run_summary_payload, write_json

__all__ = [
    "build_run_summary_payload",
    "format_row",
    "maybe_plot_gain_curves",
    "render_report",
    "write_json",
    "write_report",
]
