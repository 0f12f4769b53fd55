from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class BaseSchema(BaseModel):
    # Wire format is camelCase; snake_case names are still accepted on input.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
