"""
Address Finder locates the current device, asks a grounded language model for
the postal address at those coordinates and extracts a structured record from
its free-text reply.

Modules expose the resolution pipeline for the CLI and for embedding in other
front ends.
"""

__all__ = [
    "cli",
    "clients",
    "config",
    "errors",
    "models",
    "services",
    "workflow",
]
