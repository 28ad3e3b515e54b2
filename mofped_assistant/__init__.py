"""MoFPED Help Assistant: answers questions about finance.go.ug content."""

__version__ = "1.0.0"
