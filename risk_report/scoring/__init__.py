"""risk_report.scoring — Questionnaire scoring and category recommendations."""
