"""
Google Sheets Document Store

DESIGN DECISION: Google Sheets is used as the hosted storage backend because:
1. Non-technical users can view their data directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

Each collection is one worksheet. Each document is one row:

    id | fields_json

TRADEOFFS:
- Not suitable for high-volume data (we're fine for personal use)
- No transactions; every call touches a single row
- Lookups scan the id column
- Deleting a row shifts the rows below it. Calls that address a row
  by number hold a per-collection lock and confirm the id cell first

gspread is blocking, so every call runs in a worker thread.
"""

import asyncio
import json
import threading
from datetime import datetime
from typing import Any, Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from finance_tracker.config import GoogleSheetsSettings, get_settings
from finance_tracker.services.storage.interface import (
    DocumentStore,
    Fields,
    StorageError,
    StoreConnectionError,
    new_document_id,
)


DOCUMENT_COLUMNS = ["id", "fields_json"]

# Scans of the id column before giving up on a row that keeps moving
ROW_LOOKUP_ATTEMPTS = 3

_DATETIME_KEY = "__datetime__"

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return {_DATETIME_KEY: value.isoformat()}
    raise TypeError(f"Cannot store value of type {type(value).__name__}")


def _decode_object(obj: dict) -> Any:
    if len(obj) == 1 and _DATETIME_KEY in obj:
        return datetime.fromisoformat(obj[_DATETIME_KEY])
    return obj


def encode_fields(fields: Fields) -> str:
    """Serialize document fields for the fields_json column."""
    return json.dumps(fields, default=_encode_value, sort_keys=True)


def decode_fields(raw: str) -> Fields:
    """Parse the fields_json column back into document fields."""
    if not raw:
        return {}
    return json.loads(raw, object_hook=_decode_object)


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication, worksheet lookup and retry logic for
    connection calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._worksheets: dict[str, gspread.Worksheet] = {}
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=SCOPES,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError as e:
                raise StoreConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                ) from e
            except Exception as e:
                raise StoreConnectionError(f"Failed to connect to Google Sheets: {e}") from e

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound as e:
                raise StoreConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                ) from e
        return self._spreadsheet

    def get_collection_sheet(self, collection: str) -> gspread.Worksheet:
        """Get or create the worksheet holding a collection."""
        sheet = self._worksheets.get(collection)
        if sheet is not None:
            return sheet

        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(collection)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=collection,
                rows=self._settings.worksheet_rows,
                cols=len(DOCUMENT_COLUMNS),
            )
            sheet.append_row(DOCUMENT_COLUMNS)

        self._worksheets[collection] = sheet
        return sheet


class GoogleSheetsDocumentStore(DocumentStore):
    """
    Google Sheets implementation of the document store.

    Reads retry on transient errors. Writes are attempted once so a
    create is never duplicated.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, collection: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(collection, threading.Lock())

    def _find_row(self, sheet: gspread.Worksheet, document_id: str) -> Optional[int]:
        """
        1-based row number of a document, or None.

        The id cell is read back before returning. If another writer
        moved the row after the scan, the column is scanned again.
        """
        for _ in range(ROW_LOOKUP_ATTEMPTS):
            ids = sheet.col_values(1)
            row_number = None
            for idx, value in enumerate(ids[1:], start=2):  # Row 1 is header
                if value == document_id:
                    row_number = idx
                    break
            if row_number is None:
                return None
            if sheet.cell(row_number, 1).value == document_id:
                return row_number
        raise StorageError(
            f"Row for document {document_id} moved during {ROW_LOOKUP_ATTEMPTS} lookups"
        )

    def _create(self, collection: str, fields: Fields) -> str:
        sheet = self._client.get_collection_sheet(collection)
        document_id = new_document_id()
        sheet.append_row([document_id, encode_fields(fields)], value_input_option="RAW")
        return document_id

    def _set(self, collection: str, document_id: str, fields: Fields, merge: bool) -> None:
        sheet = self._client.get_collection_sheet(collection)
        with self._lock_for(collection):
            row_number = self._find_row(sheet, document_id)
            if row_number is None:
                sheet.append_row([document_id, encode_fields(fields)], value_input_option="RAW")
                return

            if merge:
                current = decode_fields(sheet.cell(row_number, 2).value or "")
                current.update(fields)
                fields = current
            sheet.update_cell(row_number, 2, encode_fields(fields))

    def _get(self, collection: str, document_id: str) -> Optional[Fields]:
        sheet = self._client.get_collection_sheet(collection)
        with self._lock_for(collection):
            row_number = self._find_row(sheet, document_id)
            if row_number is None:
                return None
            return decode_fields(sheet.cell(row_number, 2).value or "")

    def _delete(self, collection: str, document_id: str) -> None:
        sheet = self._client.get_collection_sheet(collection)
        with self._lock_for(collection):
            row_number = self._find_row(sheet, document_id)
            if row_number is not None:
                sheet.delete_rows(row_number)

    def _list(self, collection: str) -> list[tuple[str, Fields]]:
        sheet = self._client.get_collection_sheet(collection)
        all_rows = sheet.get_all_values()[1:]  # Skip header

        documents = []
        for row in all_rows:
            if not row or not row[0]:  # Skip empty rows
                continue
            raw = row[1] if len(row) > 1 else ""
            documents.append((row[0], decode_fields(raw)))
        return documents

    async def create(self, collection: str, fields: Fields) -> str:
        """Append a new document row."""
        try:
            return await asyncio.to_thread(self._create, collection, fields)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to create document in {collection}: {e}") from e

    async def set(
        self,
        collection: str,
        document_id: str,
        fields: Fields,
        merge: bool = False,
    ) -> None:
        """Replace or merge a document row."""
        try:
            await asyncio.to_thread(self._set, collection, document_id, fields, merge)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to write document {document_id}: {e}") from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def get(self, collection: str, document_id: str) -> Optional[Fields]:
        """Read a document row."""
        try:
            return await asyncio.to_thread(self._get, collection, document_id)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to get document {document_id}: {e}") from e

    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a document row if present."""
        try:
            await asyncio.to_thread(self._delete, collection, document_id)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete document {document_id}: {e}") from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def list(self, collection: str) -> list[tuple[str, Fields]]:
        """Read every document row in a collection."""
        try:
            return await asyncio.to_thread(self._list, collection)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to list {collection}: {e}") from e
