"""Data models for the org directory module.

- DirectoryEntry: internal dataclass for one synchronized account, with the
  conversion to and from the cache item layout.
- WorkUnit: pydantic model of the queue message envelope (wire contract).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.org_directory import tag_codec

MAX_OU_LEVELS = 5
ID_ATTRIBUTE = "id"
NAME_ATTRIBUTE = "name"
STATUS_ATTRIBUTE = "status"
EMAIL_ATTRIBUTE = "emailAddress"
TAGS_ATTRIBUTE = "flattenedTags"


def ou_level_attribute(level: int) -> str:
    """Attribute holding the ancestor at `level` (1-based, root first)."""
    return f"ouLevel{level}"


@dataclass
class DirectoryEntry:
    """One account of the organization as stored in the cache.

    Attributes:
        id: Account id, the cache primary key
        name: Account name
        status: Account status (ACTIVE, SUSPENDED, ...)
        email_address: Account root email
        ou_path: Ancestor ids from the root down to the immediate parent
        tags: Tag mapping
    """

    id: str
    name: str
    status: str
    email_address: str
    ou_path: List[str] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)

    def to_item(self) -> Dict[str, Any]:
        """Denormalized cache item; flattenedTags is omitted without tags."""
        item: Dict[str, Any] = {
            ID_ATTRIBUTE: self.id,
            NAME_ATTRIBUTE: self.name,
            STATUS_ATTRIBUTE: self.status,
            EMAIL_ATTRIBUTE: self.email_address,
        }
        for level, ou_id in enumerate(self.ou_path, start=1):
            item[ou_level_attribute(level)] = ou_id

        flattened = tag_codec.flatten(self.tags)
        if flattened:
            item[TAGS_ATTRIBUTE] = flattened
        return item

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "DirectoryEntry":
        ou_path = []
        for level in range(1, MAX_OU_LEVELS + 1):
            ou_id = item.get(ou_level_attribute(level))
            if not ou_id:
                break
            ou_path.append(ou_id)

        return cls(
            id=item[ID_ATTRIBUTE],
            name=item.get(NAME_ATTRIBUTE, ""),
            status=item.get(STATUS_ATTRIBUTE, ""),
            email_address=item.get(EMAIL_ATTRIBUTE, ""),
            ou_path=ou_path,
            tags=tag_codec.unflatten(item.get(TAGS_ATTRIBUTE)),
        )

    def to_response(self) -> Dict[str, Any]:
        """Query output: the cache item with tags unflattened under `tags`.

        Untagged entries carry no `tags` key.
        """
        body = self.to_item()
        body.pop(TAGS_ATTRIBUTE, None)
        if self.tags:
            body["tags"] = dict(self.tags)
        return body


class WorkUnit(BaseModel):
    """Queue envelope referencing one entry pending detail fetch and upsert.

    Serialized as ``{"AccountId": "<id>"}``. Delivery is at-least-once and
    unordered; processing the same unit twice converges to the same record.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    entry_id: str = Field(alias="AccountId", min_length=1)
    message_id: Optional[str] = Field(default=None, exclude=True)
    receipt_handle: Optional[str] = Field(default=None, exclude=True)

    def to_message_body(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_message(
        cls,
        body: str,
        message_id: Optional[str] = None,
        receipt_handle: Optional[str] = None,
    ) -> "WorkUnit":
        """Parse a queue message body.

        Raises:
            pydantic.ValidationError: the body is not a valid envelope
        """
        unit = cls.model_validate_json(body)
        return unit.model_copy(
            update={"message_id": message_id, "receipt_handle": receipt_handle}
        )
