"""Ingest roster exports (CSV / Excel) into typed roster rows."""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

import pandas as pd

from orgview.hierarchy.models import ID_COLUMN, ROSTER_COLUMNS, RosterRow, roster_schema
from orgview.utils.io import read_table
from orgview.utils.transforms import clean_cell, drop_blank_rows, normalize_columns
from orgview.utils.validators import validate_dataframe, validate_required_columns

logger = logging.getLogger(__name__)


class MissingColumnError(ValueError):
    """Raised when a roster lacks the employee identifier column."""


def _row_from_mapping(record: Mapping[str, object]) -> RosterRow:
    values = {}
    for key, value in record.items():
        attr = ROSTER_COLUMNS.get(str(key).strip())
        if attr is not None and attr not in values:
            values[attr] = clean_cell(value)
    return RosterRow(**values)


def rows_from_records(records: Iterable[Mapping[str, object]]) -> list[RosterRow]:
    """Map already-parsed rows onto RosterRow, tolerating padded headers."""
    return [_row_from_mapping(record) for record in records]


def normalize_roster(raw_df: pd.DataFrame) -> list[RosterRow]:
    """Trim headers, check the schema and convert every row to a RosterRow."""
    df = normalize_columns(raw_df)

    required = validate_required_columns(df, [ID_COLUMN])
    if not required["valid"]:
        raise MissingColumnError(f"Roster is missing the '{ID_COLUMN}' column")

    df = df.loc[:, ~df.columns.duplicated()]
    df = df.map(clean_cell)
    df = drop_blank_rows(df)

    outcome = validate_dataframe(df, roster_schema)
    if not outcome["valid"]:
        for error in outcome["errors"]:
            logger.warning("Roster check: %s", error)

    rows = rows_from_records(df.to_dict(orient="records"))
    logger.info("Normalized %d roster rows", len(rows))
    return rows


def ingest_roster(path: str | Path) -> list[RosterRow]:
    """Load a roster file and return its typed rows."""
    path = Path(path)
    logger.info("Reading roster export: %s", path.name)
    return normalize_roster(read_table(path))
