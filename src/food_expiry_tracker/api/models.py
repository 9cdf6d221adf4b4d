"""Request bodies accepted by the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field


class TokenRequest(BaseModel):
    """Body of a session token request."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = None


class FoodPayload(BaseModel):
    """Food fields as sent by clients.

    Every field is optional here; FoodService decides which are required
    for create and validates the values.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    image: str | None = None
    title: str | None = None
    category: str | None = None
    quantity: float | str | None = None
    expiry_date: str | None = Field(default=None, alias="expiryDate")
    description: str | None = None
    added_date: str | None = Field(default=None, alias="addedDate")
    user_email: str | None = Field(default=None, alias="userEmail")

    def supplied_fields(self) -> dict[str, object]:
        """Return only the fields present in the request."""
        return self.model_dump(exclude_unset=True)


class NoteRequest(BaseModel):
    """Body of an add-note request."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    text: str | None = None
    author_email: str | None = Field(default=None, alias="authorEmail")
