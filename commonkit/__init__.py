"""Common service helpers and clients for Redis, MySQL and SeaweedFS."""

__version__ = "0.1.0"