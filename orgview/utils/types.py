"""Shared type definitions for the org chart views."""

from enum import StrEnum


type NodeDict = dict[str, str | bool | None | list["NodeDict"]]
type ValidationOutcome = dict[str, bool | str | list[str]]


class OrgType(StrEnum):
    COMPANY = "Company"
    GROUP = "Group"
    DIVISION = "Division"
    DEPARTMENT = "Department"
    UNIT = "Unit"


class ViewMode(StrEnum):
    REPORTING = "reporting"
    ORGANIZATION = "organization"


def parse_view_mode(value: str) -> ViewMode:
    match value.strip().lower():
        case "reporting" | "report" | "manager":
            return ViewMode.REPORTING
        case "organization" | "organisation" | "org":
            return ViewMode.ORGANIZATION
        case other:
            raise ValueError(f"Unknown view mode: {other}")
