"""Byte buffers, dates, logging, TLS policies, queues and thread pools for network services."""

__version__ = "0.1.0"