"""
risk_report.reporting — Report rendering, text fallback, and export.

Modules:
  generator  — PDF report orchestration over the layout engine.
  formatters — Plain-text formatters for CLI output and the fallback report.
  export     — CSV/JSON flat-file export helpers.
"""
