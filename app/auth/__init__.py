# Auth package
from .dependencies import get_current_user
from .utils import (
    create_access_token,
    create_oauth2_token,
    create_refresh_token,
    get_password_hash,
    parse_token,
    verify_password,
    verify_token,
)

__all__ = [
    "get_current_user",
    "create_access_token",
    "create_oauth2_token",
    "create_refresh_token",
    "get_password_hash",
    "parse_token",
    "verify_password",
    "verify_token",
]
