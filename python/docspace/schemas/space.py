"""Space-related Pydantic schemas.

Contains request models for space endpoints. Responses serialize the
stored Space entity directly.
"""

from pydantic import Field, model_validator

from docspace.schemas.base import CamelModel

__all__ = [
    "CreateSpaceRequest",
    "UpdateSpaceRequest",
]


class CreateSpaceRequest(CamelModel):
    """Request body for creating a space. The slug is derived from the name."""

    name: str = Field(..., min_length=1, description="Display name")


class UpdateSpaceRequest(CamelModel):
    """Partial update of a space.

    Only fields present in the body are applied (see ``model_fields_set``).
    ``homePageSlug`` may be sent as null to clear the home page; ``name``
    may be omitted but not null or empty.
    """

    name: str | None = Field(default=None, min_length=1)
    home_page_slug: str | None = None

    @model_validator(mode="after")
    def reject_null_name(self) -> "UpdateSpaceRequest":
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name may not be null")
        return self
