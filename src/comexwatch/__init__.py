"""comexwatch: time-sensitive alerting for import operations."""

__version__ = "0.3.0"
