"""sourcebit-sample: a reference source plugin and the harness that drives it."""

__version__ = "0.1.0"
