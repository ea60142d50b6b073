"""
infocast_client.clients

HTTP client boundary for the remote InfoCast API.

Responsibilities:
- Shared credential-attaching transport.
- Typed clients for identity and broadcast endpoints.
- Error taxonomy for remote failures.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The base URL and timeout come from `Settings` via `infocast_client.app`.
