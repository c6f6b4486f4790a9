"""Data validation utilities using pandera."""

import pandas as pd
import pandera as pa
from pandera import DataFrameSchema

from orgview.utils.types import ValidationOutcome


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationOutcome:
    """Validate a DataFrame against a pandera schema."""
    try:
        schema.validate(df, lazy=True)
        return {"valid": True, "status": "ok", "errors": []}
    except pa.errors.SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val}:
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return {"valid": False, "status": "error", "errors": errors}


def validate_required_columns(df: pd.DataFrame, columns: list[str]) -> ValidationOutcome:
    """Check that the given headers are present."""
    missing = [col for col in columns if col not in df.columns]

    match missing:
        case []:
            return {"valid": True, "status": "ok", "errors": []}
        case cols:
            return {
                "valid": False,
                "status": "error",
                "errors": [f"Missing column '{col}'" for col in cols],
            }
