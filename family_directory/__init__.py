"""Family directory backend: people, relationships, media, invites and messages."""

__version__ = "1.0.0"
