# auth.py
# Administrator check. Identity lives elsewhere; this only verifies that
# the caller holds one of the configured admin tokens.
import hmac
import logging
from functools import wraps
from flask import request
import config
from errors import Unauthorized

LOG = logging.getLogger(__name__)


def _presented_token() -> str:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip()
    return request.cookies.get("admin_token", "")


def is_admin() -> bool:
    token = _presented_token()
    if not token:
        return False
    # compare against every token so timing does not reveal a prefix match
    ok = False
    for expected in config.ADMIN_TOKENS:
        if hmac.compare_digest(token.encode(), expected.encode()):
            ok = True
    return ok


def require_admin(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin():
            LOG.warning("unauthorized %s %s from %s", request.method, request.path, request.remote_addr)
            raise Unauthorized()
        return view(*args, **kwargs)
    return wrapper
