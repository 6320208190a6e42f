"""
Google Sheets API client.

Wraps spreadsheets.values.append from google-api-python-client. The SDK is
synchronous, so every call runs in asyncio.to_thread() to avoid blocking the
ASGI event loop.
"""

import asyncio
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from loguru import logger

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class GoogleSheetsAppender:
    """Appends rows to a fixed range of one spreadsheet."""

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_file: str,
        sheet_range: str = "Sheet1!A2",
        cache_client: bool = False,
    ) -> None:
        if not spreadsheet_id:
            raise ValueError("SPREADSHEET_ID is not set.")
        self._spreadsheet_id = spreadsheet_id
        self._credentials_file = credentials_file
        self._sheet_range = sheet_range
        self._cache_client = cache_client
        self._service: Any = None

    def _authenticate(self) -> Any:
        credentials = service_account.Credentials.from_service_account_file(
            self._credentials_file,
            scopes=SCOPES,
        )
        return build("sheets", "v4", credentials=credentials, cache_discovery=False)

    def _get_service(self) -> Any:
        if not self._cache_client:
            return self._authenticate()
        if self._service is None:
            self._service = self._authenticate()
        return self._service

    async def append_rows(self, rows: list[list[Any]]) -> dict:
        """Append rows below the anchor range, in the given order."""
        logger.debug(
            f"Appending {len(rows)} rows: spreadsheet={self._spreadsheet_id}, "
            f"range={self._sheet_range}"
        )

        def _append():
            service = self._get_service()
            return (
                service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=self._spreadsheet_id,
                    range=self._sheet_range,
                    valueInputOption="RAW",
                    body={"values": rows},
                )
                .execute()
            )

        return await asyncio.to_thread(_append)
