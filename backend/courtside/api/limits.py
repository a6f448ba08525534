"""Shared rate limiter for the write endpoints"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from courtside.config import settings

limiter = Limiter(key_func=get_remote_address)

WRITE_LIMIT = settings.RATE_LIMIT
