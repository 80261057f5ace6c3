"""
Shared pydantic plumbing for procurement records.

Records arrive in their stored JSON shape (camelCase keys, optional or
wrongly-typed fields). The lenient field types below coerce once at this
boundary so that scoring code can rely on fully-populated shapes.
"""
import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from ..utils.text import coerce_number

logger = logging.getLogger(__name__)


def _to_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _to_identifier(value: Any) -> str | None:
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return None
    return str(value)


def _to_text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        return []

    items: list[str] = []
    for item in value:
        text = _to_text(item)
        if text is not None and text.strip() and text not in items:
            items.append(text)
    return items


def _to_mapping_list(value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (Mapping, BaseModel))]


def _to_mapping(value: Any) -> Any:
    if isinstance(value, (Mapping, BaseModel)):
        return value
    return {}


def _to_raw_number(value: Any) -> int | float | str | None:
    if isinstance(value, bool):
        return int(value)
    if value is None or isinstance(value, (int, float, str)):
        return value
    return None


def _to_optional_number(value: Any) -> int | float | None:
    return coerce_number(value, default=None)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    if isinstance(value, (int, float)):
        return value == 1
    return False


def _to_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        # Stored as epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


Text = Annotated[str | None, BeforeValidator(_to_text)]
Identifier = Annotated[str | None, BeforeValidator(_to_identifier)]
TextList = Annotated[list[str], BeforeValidator(_to_text_list)]
RawNumber = Annotated[int | float | str | None, BeforeValidator(_to_raw_number)]
OptionalNumber = Annotated[int | float | None, BeforeValidator(_to_optional_number)]
Flag = Annotated[bool, BeforeValidator(_to_bool)]
Timestamp = Annotated[datetime | None, BeforeValidator(_to_datetime)]


def mapping_list(model: type[BaseModel]) -> Any:
    """Annotated list type that drops non-record items and tolerates non-lists."""
    return Annotated[list[model], BeforeValidator(_to_mapping_list)]


def nested(model: type[BaseModel]) -> Any:
    """Annotated nested-record type that treats non-mappings as empty records."""
    return Annotated[model, BeforeValidator(_to_mapping)]


class RecordModel(BaseModel):
    """Base model for stored records: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def from_record(cls, record: Any):
        """
        Build a model from a stored record without raising on bad shapes.

        Args:
            record: Model instance, mapping in stored JSON shape, or anything else

        Returns:
            Model instance; an empty model if the record cannot be read
        """
        if isinstance(record, cls):
            return record
        if isinstance(record, BaseModel):
            record = record.model_dump(by_alias=True)
        if not isinstance(record, Mapping):
            return cls()
        try:
            return cls.model_validate(dict(record))
        except ValidationError as e:
            logger.warning(f"Could not read {cls.__name__} record, using an empty one: {e}")
            return cls()

    def to_record(self) -> dict[str, Any]:
        """Dump in stored JSON shape (camelCase keys, ISO timestamps)."""
        return self.model_dump(mode="json", by_alias=True)
