"""
Pydantic models for Kanka API resources.

Every resource comes in two shapes:

- a "simple" form (``SimpleCharacter``, ``SimpleItem`` ...) holding only the
  fields a user may set. It is the body of create and update requests and is
  checked for its required fields only when it is turned into a payload.
- a full form (``Character``, ``Item`` ...) as returned by the API. It embeds
  the simple form under ``simple`` and adds the server-assigned fields.
"""

from datetime import datetime
from typing import Any, ClassVar, Generic, Iterator, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import PayloadValidationError

T = TypeVar("T")

MAX_RELATION_LENGTH = 255
MIN_ATTITUDE = -100
MAX_ATTITUDE = 100


def _unwrap_data(value: Any) -> Any:
    """Accept both ``[...]`` and ``{"data": [...]}`` for expanded collections."""
    if value is None:
        return []
    if isinstance(value, dict) and "data" in value:
        return value["data"] or []
    return value


class KankaModel(BaseModel):
    """Base for every Kanka model.

    Kanka sends ``null`` for unset fields. A null in a field that has a non-null
    default decodes as that default instead of failing the whole response.
    """

    @model_validator(mode="before")
    @classmethod
    def _default_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        defaulted = set()
        for name, field in cls.model_fields.items():
            if field.is_required() or field.get_default(call_default_factory=True) is None:
                continue
            defaulted.add(name)
            if field.alias:
                defaulted.add(field.alias)
        return {key: value for key, value in data.items() if value is not None or key not in defaulted}


# Envelopes
class Envelope(KankaModel, Generic[T]):
    """Single-object response: ``{"data": {...}}``."""
    data: T


class ResourceList(KankaModel, Generic[T]):
    """List response: ``{"data": [...], "sync": "..."}``.

    ``sync`` can be passed back to an ``index`` call to fetch only what changed
    since this response.
    """
    data: list[T]
    sync: datetime | None = None

    def __iter__(self) -> Iterator[T]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index: int) -> T:
        return self.data[index]


# Base shapes
class SimplePayload(KankaModel):
    """User-settable fields of a resource, sent on create and update."""
    model_config = ConfigDict(populate_by_name=True)

    required_fields: ClassVar[tuple[str, ...]] = ("name",)

    def validate_payload(self) -> None:
        """Raise PayloadValidationError if the payload can't be sent to Kanka."""
        for field in self.required_fields:
            value = getattr(self, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise PayloadValidationError.missing(type(self).__name__, field)

    def to_payload(self) -> dict[str, Any]:
        """Validate and return the JSON-ready request body."""
        self.validate_payload()
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ExpandedModel(KankaModel):
    """Full representation of a resource, composed around its simple form.

    The wire format is flat, so the simple fields are lifted into ``simple``
    before validation. Server-assigned fields all have defaults.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    created_at: datetime | None = None
    created_by: int | None = None
    updated_at: datetime | None = None
    updated_by: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _lift_simple(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "simple" in data or "simple" not in cls.model_fields:
            return data
        simple_fields = cls.model_fields["simple"].annotation.model_fields
        keys = {field.alias or name for name, field in simple_fields.items()}
        keys.update(simple_fields)
        return {**data, "simple": {key: data[key] for key in keys if key in data}}


# Entity sub-resources
class SimpleAttribute(SimplePayload):
    name: str = ""
    value: str | None = None
    type: str | None = None
    api_key: str | None = None
    default_order: int | None = None
    is_private: bool = False


class Attribute(ExpandedModel):
    """A distinct detail relating to the parent entity."""
    simple: SimpleAttribute
    entity_id: int | None = None


class SimpleEntityEvent(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ()

    calendar_id: int | None = None
    entity_id: int | None = None
    color: str | None = Field(None, alias="colour")
    comment: str | None = None
    day: int | None = None
    month: int | None = None
    year: int | None = None
    length: int | None = None
    is_recurring: bool = False
    recurring_until: int | None = None
    is_private: bool = False


class EntityEvent(ExpandedModel):
    """A calendar event relating to the parent entity."""
    simple: SimpleEntityEvent
    date: str | None = None


class SimpleEntityFile(SimplePayload):
    name: str = ""
    visibility: str | None = None
    is_private: bool = False


class EntityFile(ExpandedModel):
    """A file attached to the parent entity."""
    simple: SimpleEntityFile
    entity_id: int | None = None
    path: str | None = None
    size: int | None = None
    type: str | None = None


class SimpleEntityInventory(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ()

    entity_id: int | None = None
    item_id: int | None = None
    amount: int | None = None
    position: str | None = None
    visibility: str | None = None
    is_private: bool = False


class EntityInventory(ExpandedModel):
    """An item held in the parent entity's inventory."""
    simple: SimpleEntityInventory


class SimpleEntityNote(SimplePayload):
    name: str = ""
    entity_id: int | None = None
    entry: str | None = None
    visibility: str | None = None
    is_private: bool = False


class EntityNote(ExpandedModel):
    """A note relating to the parent entity."""
    simple: SimpleEntityNote


class SimpleEntityTag(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ()

    entity_id: int | None = None
    tag_id: int | None = None


class EntityTag(ExpandedModel):
    """Link between the parent entity and a tag."""
    simple: SimpleEntityTag


class SimpleRelation(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ("relation",)

    owner_id: int | None = None
    target_id: int | None = None
    relation: str = ""
    attitude: int = 0
    is_private: bool = False

    def validate_payload(self) -> None:
        super().validate_payload()
        model = type(self).__name__
        if len(self.relation) > MAX_RELATION_LENGTH:
            raise PayloadValidationError.out_of_range(
                model, "relation", f"exceeds {MAX_RELATION_LENGTH} characters"
            )
        if not MIN_ATTITUDE <= self.attitude <= MAX_ATTITUDE:
            raise PayloadValidationError.out_of_range(
                model, "attitude", f"({self.attitude}) must be between {MIN_ATTITUDE} and {MAX_ATTITUDE}"
            )


class Relation(ExpandedModel):
    """A relationship between two entities."""
    simple: SimpleRelation


# Core entities
class SimpleEntity(SimplePayload):
    """Fields shared by every core entity's simple form."""
    name: str = ""
    entry: str | None = None
    type: str | None = None
    tags: list[int] | None = None
    is_private: bool = False
    image: str | None = None
    image_url: str | None = None


class EntityModel(ExpandedModel):
    """Fields shared by every core entity's full form.

    The nested collections are only present when the API expanded them.
    """
    entity_id: int | None = None
    image_full: str | None = None
    image_thumb: str | None = None
    has_custom_image: bool = False

    attributes: list[Attribute] = Field(default_factory=list)
    entity_events: list[EntityEvent] = Field(default_factory=list)
    entity_files: list[EntityFile] = Field(default_factory=list)
    entity_notes: list[EntityNote] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    inventory: list[EntityInventory] = Field(default_factory=list)

    @field_validator(
        "attributes", "entity_events", "entity_files", "entity_notes", "relations", "inventory",
        mode="before",
    )
    @classmethod
    def _unwrap_collections(cls, value: Any) -> Any:
        return _unwrap_data(value)


class SimpleCharacter(SimpleEntity):
    title: str | None = None
    age: str | None = None
    sex: str | None = None
    location_id: int | None = None
    race_id: int | None = None
    family_id: int | None = None
    is_dead: bool = False


class Trait(KankaModel):
    """A character's personality or appearance detail."""
    id: int | None = None
    name: str = ""
    entry: str | None = None
    section: str | None = None
    is_private: bool = False
    default_order: int = 0


class Character(EntityModel):
    simple: SimpleCharacter
    traits: list[Trait] = Field(default_factory=list)

    @field_validator("traits", mode="before")
    @classmethod
    def _unwrap_traits(cls, value: Any) -> Any:
        return _unwrap_data(value)


class SimpleLocation(SimpleEntity):
    parent_location_id: int | None = None
    map: str | None = None


class Location(EntityModel):
    simple: SimpleLocation
    is_map_private: int = 0


class SimpleFamily(SimpleEntity):
    location_id: int | None = None
    family_id: int | None = None


class Family(EntityModel):
    simple: SimpleFamily
    members: list[int] = Field(default_factory=list)


class SimpleOrganization(SimpleEntity):
    organization_id: int | None = Field(None, alias="organisation_id")
    location_id: int | None = None


class Organization(EntityModel):
    simple: SimpleOrganization
    members: int = 0


class SimpleItem(SimpleEntity):
    price: str | None = None
    size: str | None = None
    location_id: int | None = None
    character_id: int | None = None


class Item(EntityModel):
    simple: SimpleItem


class SimpleNote(SimpleEntity):
    pass


class Note(EntityModel):
    simple: SimpleNote


class SimpleEvent(SimpleEntity):
    date: str | None = None
    location_id: int | None = None


class Event(EntityModel):
    simple: SimpleEvent


class SimpleCalendar(SimpleEntity):
    date: str | None = None
    suffix: str | None = None
    has_leap_year: bool = False
    leap_year_amount: int | None = None
    leap_year_month: int | None = None
    leap_year_offset: int | None = None
    leap_year_start: int | None = None


class CalendarMonth(KankaModel):
    name: str = ""
    length: int = 0
    type: str | None = None


class Calendar(EntityModel):
    simple: SimpleCalendar
    parameters: str | None = None
    months: list[CalendarMonth] = Field(default_factory=list)
    weekdays: list[str] = Field(default_factory=list)
    # Kanka sends an empty list instead of an empty object for these.
    years: Any = None
    seasons: list[dict[str, Any]] = Field(default_factory=list)
    moons: list[dict[str, Any]] = Field(default_factory=list)


class SimpleRace(SimpleEntity):
    race_id: int | None = None


class Race(EntityModel):
    simple: SimpleRace


class SimpleQuest(SimpleEntity):
    quest_id: int | None = None
    character_id: int | None = None
    is_completed: bool = False


class Quest(EntityModel):
    simple: SimpleQuest
    characters: int = 0
    locations: int = 0


class SimpleJournal(SimpleEntity):
    date: str | None = None
    location_id: int | None = None
    character_id: int | None = None


class Journal(EntityModel):
    simple: SimpleJournal


class SimpleTag(SimpleEntity):
    tag_id: int | None = None
    color: str | None = Field(None, alias="colour")


class Tag(EntityModel):
    simple: SimpleTag
    entities: list[int] = Field(default_factory=list)


class SimpleConversation(SimpleEntity):
    target: str | None = None


class Conversation(EntityModel):
    simple: SimpleConversation
    participants: int = 0
    messages: int = 0


class SimpleDiceRoll(SimpleEntity):
    character_id: int | None = None
    system: str | None = None
    parameters: str | None = None


class DiceRoll(EntityModel):
    simple: SimpleDiceRoll
    rolls: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("rolls", mode="before")
    @classmethod
    def _unwrap_rolls(cls, value: Any) -> Any:
        return _unwrap_data(value)


# Resources nested under a location, organisation or quest
class SimpleMapPoint(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ("name", "color", "icon", "shape", "size")

    location_id: int | None = None
    target_entity_id: int | None = None
    name: str = ""
    axis_x: int = 0
    axis_y: int = 0
    color: str = Field("", alias="colour")
    icon: str = ""
    shape: str = ""
    size: str = ""


class MapPoint(ExpandedModel):
    """A point of interest on a location's map."""
    simple: SimpleMapPoint


class SimpleOrganizationMember(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ()

    character_id: int | None = None
    organization_id: int | None = Field(None, alias="organisation_id")
    role: str | None = None
    is_private: bool = False


class OrganizationMember(ExpandedModel):
    simple: SimpleOrganizationMember


class SimpleQuestCharacter(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ()

    quest_id: int | None = None
    character_id: int | None = None
    description: str | None = None
    role: str | None = None
    is_private: bool = False


class QuestCharacter(ExpandedModel):
    simple: SimpleQuestCharacter


class SimpleQuestItem(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ()

    quest_id: int | None = None
    item_id: int | None = None
    description: str | None = None
    role: str | None = None
    is_private: bool = False


class QuestItem(ExpandedModel):
    simple: SimpleQuestItem


class SimpleQuestLocation(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ()

    quest_id: int | None = None
    location_id: int | None = None
    description: str | None = None
    role: str | None = None
    is_private: bool = False


class QuestLocation(ExpandedModel):
    simple: SimpleQuestLocation


class SimpleQuestOrganization(SimplePayload):
    required_fields: ClassVar[tuple[str, ...]] = ()

    quest_id: int | None = None
    organization_id: int | None = Field(None, alias="organisation_id")
    description: str | None = None
    role: str | None = None
    is_private: bool = False


class QuestOrganization(ExpandedModel):
    simple: SimpleQuestOrganization


# Account level
class Profile(KankaModel):
    """The current user."""
    id: int
    name: str
    avatar: str | None = None
    avatar_thumb: str | None = None
    locale: str | None = None
    timezone: str | None = None
    date_format: str | None = None
    default_pagination: int | None = None
    last_campaign_id: int | None = None
    is_patreon: bool = False


class User(KankaModel):
    id: int
    name: str
    avatar: str | None = None


class Member(KankaModel):
    """A user taking part in a campaign."""
    id: int
    user: User


class Campaign(KankaModel):
    id: int
    name: str
    locale: str | None = None
    entry: str | None = None
    image: str | None = None
    image_full: str | None = None
    image_thumb: str | None = None
    visibility: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    members: list[Member] = Field(default_factory=list)

    @field_validator("members", mode="before")
    @classmethod
    def _unwrap_members(cls, value: Any) -> Any:
        return _unwrap_data(value)


class Links(KankaModel):
    first: str | None = None
    last: str | None = None
    prev: str | None = None
    next: str | None = None


class Meta(KankaModel):
    current_page: int = 1
    from_: int | None = Field(None, alias="from")
    last_page: int = 1
    path: str | None = None
    per_page: int | None = None
    to: int | None = None
    total: int | None = None


class CampaignList(ResourceList[Campaign]):
    """First page of the user's campaigns with its paging information."""
    links: Links | None = None
    meta: Meta | None = None


class SearchResult(KankaModel):
    """Lightweight summary of an entity matching a search query."""
    id: int
    entity_id: int | None = None
    name: str
    image: str | None = None
    image_thumb: str | None = None
    has_custom_image: bool = False
    type: str | None = None
    tooltip: str | None = None
    url: str | None = None
    is_attributes_private: int = 0
    is_private: bool = False
    created_at: datetime | None = None
    created_by: int | None = None
    updated_at: datetime | None = None
    updated_by: int | None = None
