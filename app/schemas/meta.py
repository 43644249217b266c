from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.services.meta_values import ValueKind


class EntityType(str, enum.Enum):
    POST = "post"
    TERM = "term"
    USER = "user"


class EntityRef(BaseModel):
    """The object whose meta data is shown: one entity type and one id."""

    model_config = ConfigDict(frozen=True)

    type: EntityType
    object_id: int = Field(gt=0)


class MetaUpdateRequest(BaseModel):
    """Form fields posted by the inline editor."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str = Field(min_length=1)
    type: EntityType
    object_id: int = Field(alias="objectID", gt=0)
    original_value: str = Field(alias="originalValue")
    new_value: str = Field(alias="newValue")
    nonce: str = Field(min_length=1)
    value_kind: Optional[ValueKind] = Field(default=None, alias="valueKind")

    @property
    def entity(self) -> EntityRef:
        return EntityRef(type=self.type, object_id=self.object_id)


# Wire names of the fields every request must carry, in reporting order
REQUIRED_FIELDS = ("key", "type", "objectID", "originalValue", "newValue", "nonce")


@dataclass
class UpdateValidation:
    """Either a parsed request or the per-field errors that prevented it."""

    request: Optional[MetaUpdateRequest] = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.request is not None and not self.errors


def validate_update_form(form: Mapping[str, Any]) -> UpdateValidation:
    """
    Validate the posted fields in one pass.

    Every missing or malformed field is reported as ``"Invalid <field>"``
    under its wire name; nothing short-circuits.
    """
    try:
        request = MetaUpdateRequest.model_validate(dict(form))
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            name = str(error["loc"][0]) if error["loc"] else "request"
            errors.setdefault(name, f"Invalid {name}")
        ordered = {name: errors.pop(name) for name in REQUIRED_FIELDS if name in errors}
        ordered.update(errors)
        return UpdateValidation(errors=ordered)
    return UpdateValidation(request=request)


class MetaUpdateResponse(BaseModel):
    success: bool
    data: dict[str, Any]
