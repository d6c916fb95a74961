"""
Rate Limiting - protects the GitHub quota behind this service.

Every document call costs one or two GitHub API requests, so clients are
throttled per address before they can drain the token's hourly budget.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from ..core.config import RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE

limiter = Limiter(
    key_func=get_remote_address,
    enabled=RATE_LIMIT_ENABLED
)

rate_limit_per_minute = limiter.limit(f"{RATE_LIMIT_PER_MINUTE}/minute")
