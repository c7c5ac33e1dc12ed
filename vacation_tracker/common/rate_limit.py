"""Rate limiting configuration using slowapi.

Module-level Limiter wired into the app in main.py; routers may override the
default per endpoint with ``@limiter.limit("N/period")``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["60/minute"],
)
