"""Byte buffers, local file access and a UDP datagram interface for mesh networking nodes."""

__version__ = "0.1.0"