"""
infocast_client.session

Session package.

Responsibilities:
- `SessionManager`: credential lifecycle and current principal.
"""

# Package marker.
