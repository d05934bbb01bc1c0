"""Google Drive authentication.

Uses an OAuth client secret downloaded from the Google Cloud Console and a
token cached next to it. The first run opens the browser for consent.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from todo_cli.exceptions import DriveAuthError
from todo_cli.models.config_models import DRIVE_FILE_SCOPE

logger = logging.getLogger(__name__)

SETUP_HELP = """To get credentials:
1. Go to Google Cloud Console
2. Create a new project or select existing one
3. Enable Google Drive API
4. Create credentials (OAuth 2.0 Client ID, desktop app)
5. Download JSON and save as '{name}'"""


def load_credentials(
    credentials_file: str | Path,
    token_file: str | Path,
    scopes: list[str] | None = None,
) -> Credentials:
    """Return valid user credentials, running the consent flow if needed."""
    scopes = scopes or [DRIVE_FILE_SCOPE]
    credentials_file = Path(credentials_file)
    token_file = Path(token_file)
    creds = None

    if token_file.exists():
        try:
            creds = Credentials.from_authorized_user_file(str(token_file), scopes)
        except ValueError as e:
            logger.warning("ignoring unreadable token file %s: %s", token_file, e)

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except GoogleAuthError as e:
            logger.warning("token refresh failed, asking for consent again: %s", e)
            creds = None
    else:
        creds = None

    if creds is None:
        if not credentials_file.exists():
            raise DriveAuthError(
                f"Google Drive credentials not found. Please place "
                f"'{credentials_file}' in the current directory.\n"
                + SETUP_HELP.format(name=credentials_file.name)
            )
        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                str(credentials_file), scopes
            )
            creds = flow.run_local_server(port=0)
        except (ValueError, GoogleAuthError) as e:
            raise DriveAuthError(f"Google Drive authorization failed: {e}") from e

    _save_token(token_file, creds)
    return creds


def _save_token(token_file: Path, creds: Credentials) -> None:
    try:
        token_file.write_text(creds.to_json(), encoding="utf-8")
        os.chmod(token_file, 0o600)
    except OSError as e:
        logger.warning("unable to cache oauth token at %s: %s", token_file, e)
        return
    logger.info("cached oauth token at %s", token_file)


def build_drive_service(
    credentials_file: str | Path,
    token_file: str | Path,
    scopes: list[str] | None = None,
) -> Any:
    """Return an authenticated Drive v3 service resource."""
    creds = load_credentials(credentials_file, token_file, scopes)
    return build("drive", "v3", credentials=creds, cache_discovery=False)
