"""Investment risk questionnaire scoring and PDF stress-test reports."""

__version__ = "0.1.0"
