"""
infocast_client.cli

Command-line front end.
"""

# Package marker.
