"""pullwatch - decides which pull requests are new versions for a CI pipeline."""

__version__ = "0.1.0"
