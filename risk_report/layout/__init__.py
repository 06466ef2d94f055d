"""
risk_report.layout — Page geometry, drawing surfaces, and the layout engine.

Modules:
  cursor  — Page geometry and the vertical cursor.
  surface — ``DrawingSurface`` protocol and the ReportLab implementation.
  engine  — Sequential, paginating layout over a surface.
"""
