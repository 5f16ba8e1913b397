"""Profile store record and acknowledgement models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserProfile(BaseModel):
    """A user record owned by the profile store.

    Keys this service does not know about are kept, so the record can be
    sent back unchanged in link and merge calls.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = Field(default=None, description="User ID")
    nickname: str | None = Field(default=None, description="Nickname")
    first_name: str | None = Field(default=None, alias="firstName", description="First name")
    last_name: str | None = Field(default=None, alias="lastName", description="Last name")
    details: dict[str, Any] = Field(default_factory=dict, description="Named user details")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("details", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_record(self) -> dict[str, Any]:
        """Return the record as the profile store expects it."""
        return self.model_dump(by_alias=True, exclude_none=True)


class LinkCode(BaseModel):
    """A linking code record as returned by the code lookup."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: str = Field(..., description="Numeric linking code")
    issued_at_millis: int = Field(..., alias="time", description="Issuance, epoch ms")
    user_id: str = Field(..., alias="userid", description="User who requested the code")

    @field_validator("code", "user_id", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    def is_expired(self, now_millis: int, ttl_millis: int) -> bool:
        return now_millis - self.issued_at_millis >= ttl_millis


class WriteResult(BaseModel):
    """Acknowledgement of a write to the profile store."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    ok: int = 0
    n_modified: int = Field(default=0, alias="nModified")
    inserted_count: int = Field(default=0, alias="insertedCount")
    retry: bool = False

    @property
    def acknowledged_insert(self) -> bool:
        return self.ok == 1 and self.inserted_count == 1

    @property
    def acknowledged_update(self) -> bool:
        return self.ok == 1 and self.n_modified == 1
