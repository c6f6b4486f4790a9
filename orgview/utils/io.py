"""File I/O utilities for reading rosters and writing view output."""

import json
from pathlib import Path

import pandas as pd
from rich.console import Console

from orgview.utils.types import NodeDict

type FilePath = str | Path

console = Console()

CSV_ENCODINGS = ("utf-8", "utf-8-sig", "cp874", "latin-1")


def read_csv_file(path: FilePath) -> pd.DataFrame:
    """Read a CSV export as strings, handling encoding quirks."""
    for encoding in CSV_ENCODINGS:
        try:
            return pd.read_csv(path, encoding=encoding, dtype=str, keep_default_na=False)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode {path}")


def read_excel_file(path: FilePath, sheet_name: str | int = 0) -> pd.DataFrame:
    """Read the first sheet of an Excel workbook."""
    path = Path(path)

    match path.suffix.lower():
        case ".xlsx":
            return pd.read_excel(path, sheet_name=sheet_name, engine="openpyxl", dtype=object)
        case ".xls":
            return pd.read_excel(path, sheet_name=sheet_name, engine="xlrd", dtype=object)
        case ext:
            raise ValueError(f"Unsupported Excel format: {ext}")


def read_table(path: FilePath) -> pd.DataFrame:
    """Read a CSV or Excel file based on its suffix."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Roster file missing: {path}")

    match path.suffix.lower():
        case ".csv":
            return read_csv_file(path)
        case ".xlsx" | ".xls":
            return read_excel_file(path)
        case ext:
            raise ValueError(f"Unsupported roster format: {ext or path.name}")


def write_output(forest: list[NodeDict], path: FilePath) -> None:
    """Write a rendered forest as indented JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(forest, f, ensure_ascii=False, indent=2)

    console.print(f"  Wrote {len(forest)} root(s) to {path}")
