"""Pydantic models for the Copilot extension request payload."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

# --- References ---


class Position(BaseModel):
    """A line/column position inside a client document."""

    model_config = ConfigDict(extra="allow", frozen=True)

    line: int
    col: int


class RepositoryData(BaseModel):
    """Payload of a `github.repository` reference."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: int | str | None = None
    name: str | None = None
    owner_login: str | None = Field(default=None, alias="ownerLogin")
    owner_type: str | None = Field(default=None, alias="ownerType")
    description: str | None = None
    visibility: str | None = None


class FileData(BaseModel):
    """Payload of a `client.file` reference."""

    model_config = ConfigDict(extra="allow", frozen=True)

    content: str = ""
    language: str | None = None


class SelectionData(BaseModel):
    """Payload of a `client.selection` reference."""

    model_config = ConfigDict(extra="allow", frozen=True)

    start: Position
    end: Position
    content: str | None = None


class _ReferenceBase(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    is_implicit: bool = False
    metadata: dict[str, Any] | None = None


class RepositoryReference(_ReferenceBase):
    """A repository the conversation is about."""

    type: Literal["github.repository"]
    data: RepositoryData


class FileReference(_ReferenceBase):
    """A file open in the user's editor."""

    type: Literal["client.file"]
    data: FileData


class SelectionReference(_ReferenceBase):
    """A text selection in the user's editor."""

    type: Literal["client.selection"]
    data: SelectionData


class OtherReference(_ReferenceBase):
    """Any reference type the relay does not know about; kept as-is."""

    type: str
    data: Any = None


_KNOWN_REFERENCE_TYPES = frozenset({"github.repository", "client.file", "client.selection"})


def _reference_tag(value: Any) -> str:
    ref_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return ref_type if ref_type in _KNOWN_REFERENCE_TYPES else "other"


Reference = Annotated[
    Union[  # noqa: UP007
        Annotated[RepositoryReference, Tag("github.repository")],
        Annotated[FileReference, Tag("client.file")],
        Annotated[SelectionReference, Tag("client.selection")],
        Annotated[OtherReference, Tag("other")],
    ],
    Discriminator(_reference_tag),
]


# --- Conversation ---


class Message(BaseModel):
    """One turn of the conversation."""

    model_config = ConfigDict(extra="allow", frozen=True)

    role: str
    content: str
    copilot_references: list[Reference] | None = None


class ChatRequest(BaseModel):
    """Body of a Copilot extension agent request."""

    model_config = ConfigDict(extra="allow", frozen=True)

    messages: list[Message] = Field(min_length=1)
    temperature: float | None = None
    top_p: float | None = None
    max_tokens: int | None = None
    copilot_thread_id: str | None = None
    agent: str | None = None


class Identity(BaseModel):
    """The GitHub account behind a delegated token."""

    model_config = ConfigDict(frozen=True)

    login: str


def dump_messages(messages: list[Message]) -> list[dict[str, Any]]:
    """Serialize turns for forwarding, keeping only what the caller sent."""
    return [m.model_dump(mode="json", by_alias=True, exclude_unset=True) for m in messages]
