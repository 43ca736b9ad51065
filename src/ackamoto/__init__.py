"""ackamoto - track ACKs and NACKs on pull requests."""

__version__ = "0.1.0"
