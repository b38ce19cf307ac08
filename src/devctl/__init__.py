"""devctl — development workflow CLI for port-forwarding configuration."""

__version__ = "0.3.0"
