"""Document processing core for the learner dashboard."""

__version__ = "0.1.0"
