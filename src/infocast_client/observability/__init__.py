"""
infocast_client.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- HTTP request/response logging hooks for the shared client.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Both modules are wired together by `infocast_client.app.create_client`.
