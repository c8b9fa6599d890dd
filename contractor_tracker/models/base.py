"""Base model for all data models in the tracker.

This module provides a base Pydantic model with common configuration
and helper methods for converting to and from stored records.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration and helper methods for:
    - Validation with type checking
    - camelCase keys in stored records, snake_case attributes in Python
    - Tolerance of unknown keys written by older versions of the store

    Example:
        >>> class Client(BaseDataModel):
        ...     client_name: str
        >>> client = Client(clientName="Acme")
        >>> client.client_name
        'Acme'
        >>> client.to_record()
        {'clientName': 'Acme'}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date
        arbitrary_types_allowed=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        # Stored records use camelCase keys
        alias_generator=to_camel,
        populate_by_name=True,
        # Older records may carry fields this version no longer tracks
        extra="ignore",
        frozen=False,
    )

    def to_record(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: Dict[str, Any]):
        """Build an instance from a stored record.

        Raises:
            pydantic.ValidationError: If the record is invalid
        """
        return cls.model_validate(record)
