"""Self-update command for the gt CLI.

Rebuilds the gt binary from its local source repository with embedded
version metadata and atomically replaces the installed binary.
"""

__version__ = "0.3.0"
