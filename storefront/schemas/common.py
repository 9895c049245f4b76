"""
storefront/schemas/common.py - Shared pydantic base and response envelope.

Every JSON body on the wire uses camelCase keys (customerName, originalPrice, ...);
python code uses snake_case attributes. `CamelModel` bridges both: it accepts either
spelling on input and serializes by alias.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(CamelModel):
    """`{success, message}` wrapper shared by all responses."""
    success: bool = True
    message: str = ""
