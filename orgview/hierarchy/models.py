"""Roster schema and the node shape shared by both views."""

from dataclasses import dataclass, field

import pandera as pa
from pandera import Check, Column

from orgview.utils.types import NodeDict, OrgType

ID_COLUMN = "Employee ID CardX"

# Source header -> RosterRow attribute
ROSTER_COLUMNS: dict[str, str] = {
    ID_COLUMN: "employee_id",
    "Name (EN)": "name",
    "Position": "position",
    "Supervisor ID": "supervisor_id",
    "Company": "company",
    "Unit": "unit",
    "Department": "department",
    "Division": "division",
    "Group": "group",
    "Corporate Title": "corporate_title",
    "Office Email": "email",
    "Service Date": "service_date",
    "Location": "location",
}


roster_schema = pa.DataFrameSchema(
    {
        ID_COLUMN: Column(str, nullable=True),
        "Name (EN)": Column(str, Check.str_length(max_value=200), nullable=True, required=False),
        "Position": Column(str, nullable=True, required=False),
        "Supervisor ID": Column(str, nullable=True, required=False),
        "Office Email": Column(
            str,
            Check.str_matches(r"^$|^-$|^[\w.+-]+@[\w-]+\.[\w.]+$"),
            nullable=True,
            required=False,
        ),
    },
    strict=False,
    coerce=True,
)


@dataclass(frozen=True)
class RosterRow:
    """One roster line mapped onto the fixed column set, all fields trimmed."""

    employee_id: str = ""
    name: str = ""
    position: str = ""
    supervisor_id: str = ""
    company: str = ""
    unit: str = ""
    department: str = ""
    division: str = ""
    group: str = ""
    corporate_title: str = ""
    email: str = ""
    service_date: str = ""
    location: str = ""


@dataclass(frozen=True)
class OrgNode:
    id: str
    name: str
    position: str = ""
    corporate_title: str = ""
    employee_id: str = ""
    is_vacant: bool = False
    org_type: OrgType = OrgType.COMPANY
    org_name: str = ""
    group_name: str = ""
    division_name: str = ""
    department_name: str = ""
    unit_name: str = ""
    email: str = "-"
    hire_date: str = ""
    location: str = ""
    manager_id: str | None = None
    is_org_node: bool = False
    children: tuple["OrgNode", ...] = field(default=(), repr=False)

    @property
    def label(self) -> str:
        return self.org_name or self.name

    def to_dict(self) -> NodeDict:
        """Render the node and its subtree in the camelCase export shape."""
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "isVacant": self.is_vacant,
            "name": self.name,
            "position": self.position,
            "corporateTitle": self.corporate_title,
            "orgType": str(self.org_type),
            "orgName": self.org_name,
            "groupName": self.group_name,
            "divisionName": self.division_name,
            "departmentName": self.department_name,
            "unitName": self.unit_name,
            "email": self.email,
            "hireDate": self.hire_date,
            "location": self.location,
            "managerId": self.manager_id,
            "isOrgNode": self.is_org_node,
            "children": [child.to_dict() for child in self.children],
        }


def container_node(
    node_id: str,
    label: str,
    org_type: OrgType,
    group_name: str = "",
    division_name: str = "",
    department_name: str = "",
    unit_name: str = "",
    children: tuple[OrgNode, ...] = (),
) -> OrgNode:
    """Build a synthetic Group/Division/Department/Unit node."""
    return OrgNode(
        id=node_id,
        name=label,
        position=f"{org_type} Node",
        corporate_title=f"{org_type} Node",
        org_type=org_type,
        org_name=label,
        group_name=group_name,
        division_name=division_name,
        department_name=department_name,
        unit_name=unit_name,
        is_org_node=True,
        children=children,
    )
