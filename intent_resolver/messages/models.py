"""Inbound NLU message models.

Messages are produced upstream by the NLU/channel layer and are read-only
here. Wire names are camelCase; fields accept both alias and field name.
"""

from pydantic import BaseModel, ConfigDict, Field


class Intent(BaseModel):
    """Upstream-classified user goal."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, description="Intent name, e.g. database-get")


class MessengerIdentity(BaseModel):
    """Identity of a user on one messenger."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    messenger: str = Field(..., description="Messenger name, e.g. telegram")
    id: str = Field(..., description="User ID on that messenger")


class MessageUser(BaseModel):
    """The user who sent the message, as known to the channel layer."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str | None = Field(default=None, description="Profile store user ID")
    messenger_identities: list[MessengerIdentity] = Field(
        default_factory=list,
        alias="messengerIdentities",
        description="Messenger identities attached to this user",
    )

    def to_record(self) -> dict:
        """Return the user as the profile store expects it."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Entity(BaseModel):
    """A named span extracted from the user's message."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    entity: str = Field(..., description="Role name")
    value: str | None = Field(default=None, description="Extracted value")


class Message(BaseModel):
    """An NLU message: intent, sender and extracted entities.

    Entities are ranked by confidence, highest first.
    """

    model_config = ConfigDict(extra="ignore")

    intent: Intent | None = None
    user: MessageUser | None = None
    entities: list[Entity] = Field(default_factory=list)

    @property
    def intent_name(self) -> str | None:
        return self.intent.name if self.intent else None

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user else None
