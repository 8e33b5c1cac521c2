"""
Module: exporter.document.auth

Purpose:
    Obtain OAuth credentials for the Docs/Drive APIs before any export call.
    A cached token is reused while valid, refreshed when expired, and the
    interactive browser flow runs only when neither works.

Key Functions:
    - load_credentials(): Cached → refreshed → interactive credentials

Key Classes:
    - AuthenticationError: No usable credentials

Dependencies:
    - google.oauth2.credentials: Authorized-user tokens
    - google.auth.transport.requests: Token refresh transport
    - google_auth_oauthlib.flow: Interactive installed-app flow

Used By:
    - printables_toolkit.cli
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from printables_toolkit.exporter.config import AuthConfig

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """No valid credentials could be obtained."""
    pass


def _load_cached(config: AuthConfig) -> Optional[Credentials]:
    if not config.token_path.exists():
        return None
    try:
        return Credentials.from_authorized_user_file(str(config.token_path), list(config.scopes))
    except (ValueError, OSError) as e:
        logger.warning(f"Ignoring unreadable token cache {config.token_path}: {e}")
        return None


def _save(credentials: Credentials, token_path: Path) -> None:
    token_path.parent.mkdir(parents=True, exist_ok=True)
    with open(token_path, "w", encoding="utf-8") as token:
        token.write(credentials.to_json())
    logger.info(f"Credentials saved to {token_path}")


def load_credentials(config: AuthConfig) -> Credentials:
    """
    Get valid credentials.

    Order:
    1. Cached token, if still valid
    2. Cached token refreshed with its refresh token, if expired
    3. Interactive flow, if allowed and client secrets exist

    Args:
        config: Token cache and client secrets locations

    Returns:
        Valid Credentials

    Raises:
        AuthenticationError: If none of the above yields valid credentials
    """
    creds = _load_cached(config)

    if creds and creds.valid:
        logger.debug("Using cached credentials")
        return creds

    if creds and creds.expired and creds.refresh_token:
        logger.info("Refreshing expired credentials...")
        try:
            creds.refresh(Request())
        except GoogleAuthError as e:
            logger.warning(f"Token refresh failed: {e}")
            creds = None
        else:
            _save(creds, config.token_path)
            return creds

    if not config.interactive:
        raise AuthenticationError(
            "No valid cached credentials and interactive sign-in is disabled"
        )

    if config.client_secrets_path is None or not config.client_secrets_path.exists():
        raise AuthenticationError(
            f"OAuth client secrets not found: {config.client_secrets_path}. "
            "Download OAuth credentials from Google Cloud Console."
        )

    logger.info("Opening browser for authorization...")
    try:
        flow = InstalledAppFlow.from_client_secrets_file(
            str(config.client_secrets_path), list(config.scopes)
        )
        creds = flow.run_local_server(port=0)
    except (GoogleAuthError, ValueError) as e:
        raise AuthenticationError(f"Interactive sign-in failed: {e}") from e

    _save(creds, config.token_path)
    return creds
