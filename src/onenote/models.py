"""
OneNote entity schemas.

Pydantic models for the JSON bodies returned by the OneNote REST API. Field
names follow Python conventions with the API's camelCase names as aliases.
Unknown fields are kept so nothing in a response is lost.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class OneNoteModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class HrefUrl(OneNoteModel):
    href: str | None = None


class Links(OneNoteModel):
    """Client and web links returned for notebooks, sections and pages."""

    onenote_client_url: HrefUrl | None = Field(default=None, alias="oneNoteClientUrl")
    onenote_web_url: HrefUrl | None = Field(default=None, alias="oneNoteWebUrl")


class GenericEntity(OneNoteModel):
    """Notebook, section or section group.

    Attributes:
        id: Entity id
        name: Display name
        self_url: Canonical URL of the entity (``self`` in the API)
        links: Client and web links (notebooks only)
        sections: Nested sections when requested with $expand
        section_groups: Nested section groups when requested with $expand

    Example:
        >>> entity = GenericEntity.model_validate({"id": "0-1", "name": "My Notebook"})
        >>> str(entity)
        'Name: My Notebook, Id: 0-1'
    """

    id: str | None = None
    name: str | None = None
    self_url: str | None = Field(default=None, alias="self")
    links: Links | None = None
    created_time: datetime | None = Field(default=None, alias="createdTime")
    last_modified_time: datetime | None = Field(default=None, alias="lastModifiedTime")
    is_default: bool | None = Field(default=None, alias="isDefault")
    user_role: str | None = Field(default=None, alias="userRole")
    sections: list["GenericEntity"] | None = None
    section_groups: list["GenericEntity"] | None = Field(default=None, alias="sectionGroups")

    def __str__(self) -> str:
        return f"Name: {self.name}, Id: {self.id}"


class Page(OneNoteModel):
    """OneNote page metadata."""

    id: str | None = None
    title: str | None = None
    self_url: str | None = Field(default=None, alias="self")
    links: Links | None = None
    content_url: str | None = Field(default=None, alias="contentUrl")
    created_time: datetime | None = Field(default=None, alias="createdTime")
    last_modified_time: datetime | None = Field(default=None, alias="lastModifiedTime")

    def __str__(self) -> str:
        return f"Title: {self.title}, Id: {self.id}"


class CopyOperation(OneNoteModel):
    """Body of a 202 response to a copy request; poll ``self_url`` for progress."""

    id: str | None = None
    status: str | None = None
    self_url: str | None = Field(default=None, alias="self")
    created_date_time: datetime | None = Field(default=None, alias="createdDateTime")
    resource_location: str | None = Field(default=None, alias="resourceLocation")


class PatchCommand(OneNoteModel):
    """One PATCH command for page content. Every command needs a target and an action."""

    target: str
    action: str
    content: str | None = None
    position: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


EntityT = TypeVar("EntityT", bound=BaseModel)


class ODataCollection(OneNoteModel, Generic[EntityT]):
    """List response shape: ``{"value": [...]}``. A body without ``value`` is invalid."""

    value: list[EntityT]


__all__ = [
    "OneNoteModel",
    "HrefUrl",
    "Links",
    "GenericEntity",
    "Page",
    "CopyOperation",
    "PatchCommand",
    "ODataCollection",
]
