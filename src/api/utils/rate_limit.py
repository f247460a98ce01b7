"""
Rate limiting for the public password reset endpoints

Requests are counted per client address, separately for each endpoint.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from config import ApplicationConfig

limiter = Limiter(key_func=get_remote_address, enabled=ApplicationConfig.RATE_LIMIT_ENABLED)

PASSWORD_RESET_RATE_LIMIT = ApplicationConfig.PASSWORD_RESET_RATE_LIMIT
