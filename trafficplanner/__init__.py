"""Multi-modal route and round-tour planning over city transport networks."""

__version__ = "0.1.0"