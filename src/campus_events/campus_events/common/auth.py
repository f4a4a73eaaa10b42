from __future__ import annotations

import hmac
from functools import wraps

from flask import current_app, request

from ..core.constants import ADMIN_TOKEN_HEADER
from ..core.exceptions import AuthenticationError, AuthorizationError


def admin_token_required(view):
    """Guard an admin route with the shared-secret header.

    A missing header is a 401, a wrong one a 403. An empty ``ADMIN_TOKEN``
    setting rejects every token.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        supplied = request.headers.get(ADMIN_TOKEN_HEADER)
        if not supplied:
            raise AuthenticationError(f"Admin token required. Include {ADMIN_TOKEN_HEADER} header.")

        expected = current_app.config.get("ADMIN_TOKEN") or ""
        if not expected or not hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8")):
            raise AuthorizationError("Invalid admin token")
        return view(*args, **kwargs)

    return wrapper
