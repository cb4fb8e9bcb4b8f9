from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


def _check_names(names: dict[str, list[str]], kind: str) -> dict[str, list[str]]:
    for name, roles in names.items():
        if not name.strip():
            raise ValueError(f"{kind} name cannot be empty or whitespace")
        if len(set(roles)) != len(roles):
            raise ValueError(f"{kind} {name!r} lists a role more than once")
    return names


class RoleGateConfig(BaseModel):
    """Role hierarchy, subjects and actions, as read from rolegate.yaml.

    ``roles`` maps each role name to the names of the roles it implies.
    ``subjects`` and ``actions`` map a name to held / required role names.
    """

    roles: dict[str, list[str]] = Field(default_factory=dict)
    subjects: dict[str, list[str]] = Field(default_factory=dict)
    actions: dict[str, list[str]] = Field(default_factory=dict)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        return _check_names(v, "role")

    @field_validator("subjects")
    @classmethod
    def validate_subjects(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        return _check_names(v, "subject")

    @field_validator("actions")
    @classmethod
    def validate_actions(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        return _check_names(v, "action")

    @model_validator(mode="after")
    def validate_references(self) -> "RoleGateConfig":
        declared = set(self.roles)
        sections = (("role", self.roles), ("subject", self.subjects), ("action", self.actions))
        for kind, entries in sections:
            for name, refs in entries.items():
                unknown = [r for r in refs if r not in declared]
                if unknown:
                    raise ValueError(f"{kind} {name!r} references undeclared roles: {unknown}")
        return self
