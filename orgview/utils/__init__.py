"""Shared utilities for the org chart views."""

from orgview.utils.io import read_table, write_output
from orgview.utils.transforms import clean_cell, drop_blank_rows, normalize_columns
from orgview.utils.validators import validate_dataframe, validate_required_columns
from orgview.utils.types import OrgType, ViewMode, parse_view_mode
