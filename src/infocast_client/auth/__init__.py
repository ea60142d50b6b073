"""
infocast_client.auth

Authentication/authorization package.

Responsibilities:
- Principal model as reported by the identity endpoints.
- Durable credential storage.
- Client-side mirror of the owner/admin mutation policy.
"""

# Package marker.
