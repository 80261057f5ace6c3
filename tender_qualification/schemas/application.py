"""Pydantic schema for a vendor's prior tender application."""
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, Field

from .base import Identifier, RecordModel, Text, Timestamp
from .tender import Tender


def _to_tender(value: Any) -> Tender | None:
    # Unpopulated references (bare ids) carry no history signal
    if isinstance(value, (Mapping, BaseModel)):
        return Tender.from_record(value)
    return None


class Application(RecordModel):
    """An application a vendor submitted, with the tender it targeted."""

    id: Identifier = Field(default=None, alias="_id")
    user_id: Identifier = None
    tender: Annotated[Tender | None, BeforeValidator(_to_tender)] = Field(
        default=None,
        validation_alias=AliasChoices("tender", "tenderId"),
    )
    status: Text = None
    created_at: Timestamp = None
