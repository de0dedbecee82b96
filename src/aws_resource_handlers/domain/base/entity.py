"""Base resource models - typed records for resource and data-source state."""
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from aws_resource_handlers.domain.core.exceptions import ValidationError

T = TypeVar('T', bound='ResourceModel')


class ResourceModel(BaseModel):
    """Base class for all resource and data-source records."""
    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    type_name: ClassVar[str] = ""
    # Attributes whose change forces replacement rather than an in-place update
    requires_replace: ClassVar[FrozenSet[str]] = frozenset()

    id: Optional[str] = None

    @classmethod
    def from_state(cls: Type[T], attributes: Mapping[str, Any]) -> T:
        """
        Build a record from an attribute mapping supplied by the host.

        Raises:
            ValidationError: If the mapping does not satisfy the schema
        """
        try:
            return cls.model_validate(dict(attributes))
        except PydanticValidationError as e:
            errors = {
                ".".join(str(loc) for loc in error["loc"]): error["msg"]
                for error in e.errors()
            }
            raise ValidationError(f"invalid {cls.type_name or cls.__name__} configuration", errors) from e

    def to_state(self) -> Dict[str, Any]:
        """Flatten the record into a state mapping; sets become sorted lists."""
        state: Dict[str, Any] = {}
        for name, value in self.model_dump().items():
            if isinstance(value, (set, frozenset)):
                value = sorted(value)
            state[name] = value
        return state

    def changed_fields(self, other: "ResourceModel") -> List[str]:
        """Names of user-facing attributes whose values differ from ``other``."""
        return [
            name for name in type(self).model_fields
            if name != "id" and getattr(self, name) != getattr(other, name)
        ]

    def replacement_fields_changed(self, other: "ResourceModel") -> List[str]:
        """Changed attributes that cannot be updated in place."""
        return [name for name in self.changed_fields(other) if name in self.requires_replace]
