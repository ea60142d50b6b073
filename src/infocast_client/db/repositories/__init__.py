"""
infocast_client.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for client storage.
"""

# Package marker; repositories are imported directly from submodules.
