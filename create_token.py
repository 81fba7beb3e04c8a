"""Print an access token for a principal, e.g. for testing the API with curl.

Usage:
    python create_token.py A001 [lifetime_seconds]

The token is signed with ``SECRET_KEY``; start the server with the
same value for it to be accepted.
"""
import sys

from lending_registry_api.app.core.security import create_access_token

principal_id = sys.argv[1] if len(sys.argv) > 1 else "A001"
# default lifetime: 365 days
lifetime = int(sys.argv[2]) if len(sys.argv) > 2 else 365 * 24 * 60 * 60
print(create_access_token({"sub": principal_id}, expires_delta=lifetime))
