"""Base model for every HTTP payload.

Field names stay snake_case in Python; on the wire they are camelCase
(``shippingAddress``, ``paymentIntentId``). Requests are accepted in either
spelling, responses are always written with the camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_snake


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def sort_field(value: str) -> str:
    """Accept ``createdAt`` or ``created_at`` in sort parameters."""
    return to_snake(value)
