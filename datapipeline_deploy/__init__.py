"""Deploy declarative pipeline definitions to AWS Data Pipeline."""

__version__ = "0.1.0"
