"""
infocast_client.db

Durable client storage (SQLAlchemy async over SQLite).

Responsibilities:
- Provide the key/value ORM model, engine/session setup, and its repository.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The only value stored today is the bearer token (see `auth.credentials`).
