from __future__ import annotations

from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class SpecFileConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        """Explicit name, or the spec file's stem."""
        return self.name or Path(self.path).stem


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    specs: list[SpecFileConfig]

    @field_validator("specs", mode="before")
    @classmethod
    def normalize_specs(cls, v: list) -> list:
        if not isinstance(v, list):
            return v
        result = []
        for item in v:
            if isinstance(item, str):
                result.append(SpecFileConfig(path=item))
            elif isinstance(item, dict):
                result.append(SpecFileConfig(**item))
            else:
                result.append(item)
        return result

    @model_validator(mode="after")
    def specs_must_be_unique(self) -> RunConfig:
        if not self.specs:
            raise ValueError("specs must not be empty")
        seen: set[str] = set()
        for spec in self.specs:
            name = spec.display_name
            if name in seen:
                raise ValueError(f"Duplicate spec name '{name}'")
            if name in ("", ".", "..") or "/" in name or "\\" in name:
                raise ValueError(
                    f"Spec name '{name}' must be a plain directory name "
                    "(no path separators, not '.' or '..')"
                )
            seen.add(name)
        return self


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    config = RunConfig(**raw)

    # Expand ${VAR} and resolve relative spec paths against the config file location
    for spec in config.specs:
        try:
            expanded = expandvars(spec.path, nounset=True)
        except Exception as e:
            raise ValueError(f"Spec path '{spec.path}' references an unset variable: {e}")
        spec_path = Path(expanded)
        if not spec_path.is_absolute():
            spec_path = (config_dir / spec_path).resolve()
        spec.path = str(spec_path)

    return config
