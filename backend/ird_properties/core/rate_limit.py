from slowapi import Limiter
from slowapi.util import get_remote_address
from ird_properties.core.config import settings

# Shared by main.py (app.state) and the routes that carry their own limits
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
