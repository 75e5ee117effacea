from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from typing import Any, Optional


class BaseFlipperModel(BaseModel):
    """Shared configuration and methods.

    Stored records use camelCase keys so the persisted JSON matches what the
    mobile app writes; Python code uses snake_case attributes.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Update a field with user correction. Returns error message if validation fails."""
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return e.errors()[0]['msg']

    def to_record(self) -> dict:
        """Serialize for the key-value store (camelCase, unset optionals dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
