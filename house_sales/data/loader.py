"""
Raw listing source loading (CSV file or Google Sheet worksheet).

Everything is read as text; numeric parsing belongs to `cleaning`. A source
that cannot be retrieved or parsed at all raises `SourceLoadFailure`.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional, Set

import gspread
import pandas as pd
import streamlit as st
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from house_sales.config import (
    CACHE_TTL_SECONDS,
    DEFAULT_CSV_PATH,
    DEFAULT_SHEET_NAME,
    OPTIONAL_SOURCE_COLUMNS,
    SOURCE_COLUMNS,
)

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]

SENTINELS: Set[str] = {"", "None", "none", "N/A", "n/a", "NA", "na", "null", "Null", "-", "—"}


class SourceLoadFailure(RuntimeError):
    """The listing source as a whole could not be retrieved or parsed."""


def _normalize_sentinels(df: pd.DataFrame) -> pd.DataFrame:
    """Strip text cells and replace sentinel tokens with None."""
    for col in df.columns:
        if df[col].dtype == object or pd.api.types.is_string_dtype(df[col].dtype):
            stripped = df[col].map(lambda v: v.strip() if isinstance(v, str) else v)
            mask = stripped.map(lambda v: isinstance(v, str) and v in SENTINELS)
            df[col] = stripped.mask(mask, None)
    return df


def _check_contract(df: pd.DataFrame, source: str) -> pd.DataFrame:
    missing = [col for col in SOURCE_COLUMNS if col not in df.columns]
    if missing:
        raise SourceLoadFailure(f"{source} is missing required columns: {missing}")
    keep = list(SOURCE_COLUMNS) + [col for col in OPTIONAL_SOURCE_COLUMNS if col in df.columns]
    return _normalize_sentinels(df[keep].copy())


def read_csv_source(path: str) -> pd.DataFrame:
    """Read the listing CSV as text columns and validate the column contract."""
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except FileNotFoundError as exc:
        raise SourceLoadFailure(f"Listing file not found: {path}") from exc
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise SourceLoadFailure(f"Listing file could not be parsed: {path}") from exc
    return _check_contract(df, path)


def _materialize_creds_if_inline(path_or_json: str) -> str:
    """If GOOGLE_APPLICATION_CREDENTIALS is JSON content, write to /tmp and return the path."""
    if os.path.exists(path_or_json):
        return path_or_json
    text = path_or_json.strip()
    if text.startswith("{") and text.endswith("}"):
        try:
            json.loads(text)
        except json.JSONDecodeError as exc:
            raise SourceLoadFailure("GOOGLE_APPLICATION_CREDENTIALS holds invalid JSON") from exc
        tmp_path = "/tmp/google-credentials.json"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
        return tmp_path
    # Not JSON-like, treat as file path
    return path_or_json


def read_sheet_source(spreadsheet_id: str, sheet_name: str, service_account_file: str) -> pd.DataFrame:
    """Read one worksheet with every cell kept as text."""
    if not os.path.exists(service_account_file):
        raise SourceLoadFailure(f"Service account file not found: {service_account_file}")
    try:
        credentials = Credentials.from_service_account_file(service_account_file, scopes=SCOPES)
        client = gspread.authorize(credentials)
        ws = client.open_by_key(spreadsheet_id).worksheet(sheet_name)
        rows = ws.get_all_records(numericise_ignore=["all"])
    except (gspread.exceptions.GSpreadException, GoogleAuthError, ValueError) as exc:
        raise SourceLoadFailure(f"Google Sheet {spreadsheet_id}/{sheet_name} could not be read") from exc
    df = pd.DataFrame(rows)
    if df.empty:
        raise SourceLoadFailure(f"Google Sheet {spreadsheet_id}/{sheet_name} is empty")
    return _check_contract(df.astype(str), f"sheet {sheet_name}")


def resolve_source() -> dict:
    """Describe the configured source from environment variables."""
    spreadsheet_id: Optional[str] = os.getenv("SPREADSHEET_ID")
    if spreadsheet_id:
        credentials = os.getenv("GOOGLE_APPLICATION_CREDENTIALS", "google-credentials.json")
        return {
            "kind": "sheet",
            "spreadsheet_id": spreadsheet_id,
            "sheet_name": os.getenv("SHEET_NAME", DEFAULT_SHEET_NAME),
            "service_account_file": _materialize_creds_if_inline(credentials),
        }
    return {"kind": "csv", "path": os.getenv("LISTINGS_CSV_PATH", DEFAULT_CSV_PATH)}


def load_raw_rows() -> pd.DataFrame:
    """Wrapper that resolves config and calls the cached implementation."""
    source = resolve_source()
    if source["kind"] == "sheet":
        return _load_sheet_cached(source["spreadsheet_id"], source["sheet_name"], source["service_account_file"])
    return _load_csv_cached(source["path"])


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def _load_csv_cached(path: str) -> pd.DataFrame:
    logger.info("Loading listings from %s", path)
    df = read_csv_source(path)
    logger.info("Loaded %d raw rows from %s", len(df), path)
    return df


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def _load_sheet_cached(spreadsheet_id: str, sheet_name: str, service_account_file: str) -> pd.DataFrame:
    logger.info("Loading listings from Google Sheet %s (%s)", spreadsheet_id, sheet_name)
    df = read_sheet_source(spreadsheet_id, sheet_name, service_account_file)
    logger.info("Loaded %d raw rows from sheet %s", len(df), sheet_name)
    return df


def clear_cache() -> None:
    _load_csv_cached.clear()  # type: ignore[attr-defined]
    _load_sheet_cached.clear()  # type: ignore[attr-defined]
