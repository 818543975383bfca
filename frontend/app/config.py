"""
Client settings: API base URL selection, timeouts and the co-op tag.

Everything is read from the environment once at import time.
"""
import os
import re
from typing import Optional

CO_OP = os.getenv('STUDIOMATIC_CO_OP', 'STUDIO-MATIC')
PUBLIC_API_URL = "https://api.studio-matic.org"
LOCAL_API_PORT = int(os.getenv('STUDIOMATIC_LOCAL_PORT', '3000'))

# configurable via environment
API_URL = os.getenv('STUDIOMATIC_API_URL')
HOSTNAME = os.getenv('STUDIOMATIC_HOST', 'localhost')
REQUEST_TIMEOUT = float(os.getenv('STUDIOMATIC_TIMEOUT', '10'))
HEALTH_TIMEOUT = 3.0
HEALTH_INTERVAL = float(os.getenv('STUDIOMATIC_HEALTH_INTERVAL', '10'))

_LOCAL_HOSTS = {"localhost", "0.0.0.0", "[::1]", "[::]"}
_LOCAL_PATTERNS = [
    re.compile(r"^127\."),
    re.compile(r"^10\."),
    re.compile(r"^192\.168\."),
    re.compile(r"^172\.(1[6-9]|2\d|3[0-1])\."),
    re.compile(r"^\[?(fc|fd)[0-9a-fA-F:]+\]?$"),  # IPv6 unique local
]


def is_local_host(host: str) -> bool:
    """True for loopback, unspecified and private network hosts"""
    if host in _LOCAL_HOSTS:
        return True
    return any(p.search(host) for p in _LOCAL_PATTERNS)


def resolve_base_url(hostname: Optional[str] = None) -> str:
    """Pick the API base URL for the host the client is served from.

    STUDIOMATIC_API_URL wins when set. Local and private hosts talk to a
    backend on the same host at LOCAL_API_PORT, anything else to the public API.
    """
    if API_URL:
        return API_URL.rstrip('/')
    host = hostname or HOSTNAME
    if is_local_host(host):
        return f"http://{host}:{LOCAL_API_PORT}"
    return PUBLIC_API_URL
