import os
from typing import Annotated

from fastapi import Header, HTTPException


# Read per request so rotated tokens apply without a restart
def _admin_token() -> str:
    return os.getenv("ADMIN_TOKEN", "")


def _client_key() -> str:
    return os.getenv("TUTOR_API_KEY", "")


def require_admin(
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Strict admin-only guard. Requires the X-Admin-Token header to match ADMIN_TOKEN.
    """
    expected = _admin_token()
    if not expected:
        raise HTTPException(status_code=500, detail="ADMIN_TOKEN not configured on server.")
    if x_admin_token != expected:
        raise HTTPException(status_code=401, detail="Unauthorized.")


def require_client(
    x_api_key: Annotated[str | None, Header(alias="x-api-key")] = None,
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Client/API guard. Accepts either:
      - X-Admin-Token that matches ADMIN_TOKEN (admins always allowed), or
      - X-Api-Key that matches TUTOR_API_KEY.
    """
    admin = _admin_token()
    if admin and x_admin_token == admin:
        return

    key = _client_key()
    if not key:
        raise HTTPException(status_code=500, detail="TUTOR_API_KEY not configured on server.")
    if x_api_key != key:
        raise HTTPException(status_code=401, detail="Unauthorized.")
