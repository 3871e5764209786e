"""Core size aggregation and configuration."""
