"""Post CI reports on GitHub pull requests and assemble the package directory."""

__version__ = "0.1.0"
