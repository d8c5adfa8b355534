"""Car UX Review Platform: evaluation scoring and aggregation engine."""

__version__ = "1.0.0"
