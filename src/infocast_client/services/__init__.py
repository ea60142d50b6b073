"""
infocast_client.services

Service layer (UI actions over the API clients).

Responsibilities:
- Broadcast actions with the error-handling and notification policy applied.
"""

# Package marker.
