import pandas as pd
import pytest

from house_sales.data import loader
from house_sales.data.cleaning import clean_listings
from house_sales.data.loader import SourceLoadFailure, read_csv_source, resolve_source

HEADER = "Price,Area (Sqft),State,City,Property Type,Status,Bedrooms,Bathrooms,Year Built,Address\n"


def _write(tmp_path, body, header=HEADER):
    path = tmp_path / "listings.csv"
    path.write_text(header + body, encoding="utf-8")
    return str(path)


def test_reads_every_column_as_text(tmp_path):
    path = _write(tmp_path, '"$300,000","1,000 sqft",CA,Los Angeles,Condo,Sold,2,1,1998,12 Elm St\n')
    df = read_csv_source(path)
    assert df.loc[0, "Price"] == "$300,000"
    assert df.loc[0, "Year Built"] == "1998"
    assert df.loc[0, "Address"] == "12 Elm St"


def test_sentinels_become_missing(tmp_path):
    path = _write(tmp_path, '"$300,000","1,000 sqft", CA ,Los Angeles,Condo,Sold,N/A,-,,\n')
    df = read_csv_source(path)
    assert df.loc[0, "State"] == "CA"
    assert pd.isna(df.loc[0, "Bedrooms"])
    assert pd.isna(df.loc[0, "Bathrooms"])
    assert pd.isna(df.loc[0, "Year Built"])

    listings = clean_listings(df)
    assert len(listings) == 1
    assert pd.isna(listings.loc[0, "bedrooms"])


def test_address_column_is_optional(tmp_path):
    header = HEADER.replace(",Address", "")
    path = _write(tmp_path, '"$300,000","1,000 sqft",CA,Los Angeles,Condo,Sold,2,1,1998\n', header=header)
    assert "Address" not in read_csv_source(path).columns


def test_missing_file_is_a_load_failure(tmp_path):
    with pytest.raises(SourceLoadFailure, match="not found"):
        read_csv_source(str(tmp_path / "absent.csv"))


def test_missing_required_column_is_a_load_failure(tmp_path):
    path = _write(tmp_path, "1,2,3\n", header="Price,City,Status\n")
    with pytest.raises(SourceLoadFailure, match="Area \\(Sqft\\)"):
        read_csv_source(path)


def test_empty_file_is_a_load_failure(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(SourceLoadFailure):
        read_csv_source(str(path))


def test_resolve_source_defaults_to_csv(monkeypatch):
    monkeypatch.delenv("SPREADSHEET_ID", raising=False)
    monkeypatch.setenv("LISTINGS_CSV_PATH", "somewhere/listings.csv")
    assert resolve_source() == {"kind": "csv", "path": "somewhere/listings.csv"}


def test_resolve_source_prefers_sheet(monkeypatch, tmp_path):
    creds = tmp_path / "creds.json"
    creds.write_text("{}", encoding="utf-8")
    monkeypatch.setenv("SPREADSHEET_ID", "abc123")
    monkeypatch.delenv("SHEET_NAME", raising=False)
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(creds))
    assert resolve_source() == {
        "kind": "sheet",
        "spreadsheet_id": "abc123",
        "sheet_name": "Listings",
        "service_account_file": str(creds),
    }


def test_sheet_without_credentials_file_fails(tmp_path):
    with pytest.raises(SourceLoadFailure, match="Service account file"):
        loader.read_sheet_source("abc123", "Listings", str(tmp_path / "missing.json"))
