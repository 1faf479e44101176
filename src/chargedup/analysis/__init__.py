"""Run analysis tools."""

from chargedup.analysis.export import export_summary_json, export_trace_csv
from chargedup.analysis.kpi import RunSummary, compute_run_summary
from chargedup.analysis.plots import export_standard_plots

__all__ = [
    "RunSummary",
    "compute_run_summary",
    "export_standard_plots",
    "export_summary_json",
    "export_trace_csv",
]
