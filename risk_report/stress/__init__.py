"""
risk_report.stress — Model allocations and stress-scenario projection.

Modules:
  allocation — Category to model asset allocation.
  projector  — Nine-scenario impact projection.
  summary    — Executive summary data (worst case, history, mitigations).
"""
