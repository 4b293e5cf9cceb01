"""
Typed options for URL classification.

Callers may hand the classifier a ClassificationOptions instance or a
plain mapping; mappings are validated into the model, using either the
snake_case field name or the camelCase alias.
"""

from pydantic import BaseModel, ConfigDict, Field


class ClassificationOptions(BaseModel):
    """Options controlling how a candidate URL is classified"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    allow_protocol_relative: bool = Field(
        default=True,
        alias="allowProtocolRelative",
        description="Treat '//host/path' references as relative; when False they are absolute"
    )
