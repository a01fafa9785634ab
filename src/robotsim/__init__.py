"""robotsim — toy robot table simulator."""

__version__ = "0.1.0"
