"""View configuration and environment setup."""

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

from orgview.utils.types import ViewMode, parse_view_mode

type ConfigDict = dict[str, str | int | bool | list[str]]

PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_COMPANY = "CardX"
UNASSIGNED_GROUP = "Unassigned Group"


@dataclass(frozen=True)
class ViewConfig:
    company_name: str = DEFAULT_COMPANY
    unassigned_group: str = UNASSIGNED_GROUP
    default_view: ViewMode = ViewMode.REPORTING
    log_level: str = "INFO"


def _read_yaml(path: Path) -> ConfigDict:
    import yaml

    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return data.get("orgview", data)


def get_env_config(root: Path = PROJECT_ROOT) -> ConfigDict:
    """Read view config from orgview.yaml, falling back to pyproject.toml."""
    yaml_path = root / "orgview.yaml"
    if yaml_path.exists():
        return _read_yaml(yaml_path)

    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return {}
    with open(pyproject, "rb") as f:
        data = tomllib.load(f)
    return data.get("tool", {}).get("orgview", {})


def load_view_config(path: Path | None = None) -> ViewConfig:
    """Build a ViewConfig from a config file, ignoring unknown keys.

    ``path`` may point at a YAML or TOML file directly; otherwise the project
    root is searched.
    """
    match path:
        case None:
            raw = get_env_config()
        case Path() as p if p.suffix in (".yaml", ".yml"):
            raw = _read_yaml(p)
        case Path() as p if p.suffix == ".toml":
            with open(p, "rb") as f:
                data = tomllib.load(f)
            raw = data.get("tool", {}).get("orgview", data)
        case other:
            raise ValueError(f"Unsupported config file: {other}")

    known = {f.name for f in fields(ViewConfig)}
    values = {key.replace("-", "_"): value for key, value in raw.items()}
    values = {key: value for key, value in values.items() if key in known}
    if "default_view" in values:
        values["default_view"] = parse_view_mode(str(values["default_view"]))
    return ViewConfig(**values)
