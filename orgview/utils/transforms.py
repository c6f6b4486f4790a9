"""Common data transformation utilities."""

import math
from datetime import date, datetime

import pandas as pd

type ColumnMapping = dict[str, str]


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Strip surrounding whitespace from headers and apply an optional rename."""
    df = df.copy()
    df.columns = [str(col).strip() for col in df.columns]

    if mapping:
        df = df.rename(columns=mapping)

    return df


def clean_cell(value: object) -> str:
    """Render a raw spreadsheet cell as a trimmed display string."""
    match value:
        case None:
            return ""
        case _ if value is pd.NaT:
            return ""
        case float() if math.isnan(value):
            return ""
        case pd.Timestamp() | datetime():
            return value.date().isoformat()
        case date():
            return value.isoformat()
        case float() if value.is_integer():
            return str(int(value))
        case _:
            return str(value).strip()


def drop_blank_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Remove rows where every cell is empty after trimming."""
    if df.empty:
        return df
    blank = df.apply(lambda row: all(clean_cell(v) == "" for v in row), axis=1)
    return df[~blank].reset_index(drop=True)
