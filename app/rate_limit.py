"""
Rate limiting configuration using slowapi.

Two tiers:
  • search  – SEARCH_RATE_LIMIT (default 30/min; each search fans out to every course)
  • default – 60/min (everything else)

The limiter keys on client IP by default.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import SEARCH_RATE_LIMIT

limiter = Limiter(key_func=get_remote_address, default_limits=["60/minute"])

# Named rate strings for use in @limiter.limit() decorators
SEARCH = SEARCH_RATE_LIMIT   # tee time search
DEFAULT = "60/minute"        # general API
