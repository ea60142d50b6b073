"""
infocast_client.domain

Broadcast domain package.

Responsibilities:
- Broadcast entity, draft validation and tag set.
- Pure display rules and stats shaping.
"""

# Package marker.
