"""Base model and shared value types for the Firecrawl wire format."""

from typing import Annotated, Any, Dict

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class FirecrawlModel(BaseModel):
    """Base for every request and response schema.

    Attributes use snake_case in Python and camelCase on the wire. Either name
    is accepted on construction; unknown response fields are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready wire representation (``None`` fields dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


def coerce_json_value(value: Any) -> Any:
    """Normalize an arbitrary decoded JSON value.

    Variants are tried in a fixed order: null, string, number, boolean, array,
    object. Anything else is rejected.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    # bool is an int subclass; a JSON true/false is never a number
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if isinstance(value, bool):
        return value
    if isinstance(value, (list, tuple)):
        return [coerce_json_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): coerce_json_value(item) for key, item in value.items()}
    raise ValueError(f"Unable to decode JSON value of type {type(value).__name__}")


JSONValue = Annotated[Any, BeforeValidator(coerce_json_value)]
"""Any JSON value: string, number, boolean, array, object or null."""

