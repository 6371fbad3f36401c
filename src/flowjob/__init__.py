"""flowjob — configuration builder for flow-analysis grid jobs."""

__version__ = "0.1.0"
