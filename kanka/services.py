"""
Services for each Kanka endpoint.

Every service holds a reference to the shared Client and the path segment of
its resource. Resources scoped to a campaign live under
``campaigns/{campaign_id}/{resource}``; sub-resources live one level deeper,
under an entity, location, organisation or quest:
``campaigns/{campaign_id}/{parent}/{parent_id}/{resource}``.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from urllib.parse import quote

from . import endpoints
from .endpoints import Endpoint
from .errors import InvalidArgumentError, error_context
from .models import (
    Attribute,
    Calendar,
    Campaign,
    CampaignList,
    Character,
    Conversation,
    DiceRoll,
    EntityEvent,
    EntityFile,
    EntityInventory,
    EntityNote,
    EntityTag,
    Envelope,
    Event,
    ExpandedModel,
    Family,
    Item,
    Journal,
    Location,
    MapPoint,
    Member,
    Note,
    Organization,
    OrganizationMember,
    Profile,
    Quest,
    QuestCharacter,
    QuestItem,
    QuestLocation,
    QuestOrganization,
    Race,
    Relation,
    ResourceList,
    SearchResult,
    SimpleAttribute,
    SimpleCalendar,
    SimpleCharacter,
    SimpleConversation,
    SimpleDiceRoll,
    SimpleEntityEvent,
    SimpleEntityFile,
    SimpleEntityInventory,
    SimpleEntityNote,
    SimpleEntityTag,
    SimpleEvent,
    SimpleFamily,
    SimpleItem,
    SimpleJournal,
    SimpleLocation,
    SimpleMapPoint,
    SimpleNote,
    SimpleOrganization,
    SimpleOrganizationMember,
    SimplePayload,
    SimpleQuest,
    SimpleQuestCharacter,
    SimpleQuestItem,
    SimpleQuestLocation,
    SimpleQuestOrganization,
    SimpleRace,
    SimpleRelation,
    SimpleTag,
    Tag,
)

if TYPE_CHECKING:
    from .client import Client

ModelT = TypeVar("ModelT", bound=ExpandedModel)
SimpleT = TypeVar("SimpleT", bound=SimplePayload)


def with_id(end: Endpoint, resource_id: int, label: str) -> Endpoint:
    """Append ``resource_id`` to ``end``, naming the resource if it is invalid."""
    with error_context(f"invalid {label} ID"):
        return end.with_id(resource_id)


def campaign(campaign_id: int) -> Endpoint:
    return with_id(endpoints.CAMPAIGN, campaign_id, "Campaign")


class Service:
    """Handles communication with a single Kanka endpoint."""

    def __init__(self, client: "Client", end: Endpoint):
        self.client = client
        self.end = end


class ResourceService(Service, Generic[ModelT, SimpleT]):
    """Shared request plumbing for services with the four CRUD operations.

    Subclasses set ``model`` (the full representation) and ``label`` (used in
    error messages) and decide how the collection path is built.
    """

    model: type[ModelT]
    label: str

    def _index(self, path: Endpoint, sync: datetime | None, context: str) -> ResourceList[ModelT]:
        if sync is not None:
            path = path.with_since(sync)
        with error_context(context):
            return self.client.get(path, ResourceList[self.model])

    def _get(self, path: Endpoint, context: str) -> ModelT:
        with error_context(context):
            return self.client.get(path, Envelope[self.model]).data

    def _create(self, path: Endpoint, simple: SimpleT, context: str) -> ModelT:
        body = simple.to_payload()
        with error_context(context):
            return self.client.post(path, body, Envelope[self.model]).data

    def _update(self, path: Endpoint, simple: SimpleT, context: str) -> ModelT:
        body = simple.to_payload()
        with error_context(context):
            return self.client.put(path, body, Envelope[self.model]).data

    def _delete(self, path: Endpoint, context: str) -> None:
        with error_context(context):
            self.client.delete(path)


class CampaignResourceService(ResourceService[ModelT, SimpleT]):
    """A resource living directly under a campaign."""

    def _collection(self, campaign_id: int) -> Endpoint:
        return campaign(campaign_id).concat(self.end)

    def index(self, campaign_id: int, sync: datetime | None = None) -> ResourceList[ModelT]:
        """Return every resource in the campaign.

        If ``sync`` is given, only resources changed since then are returned.
        """
        return self._index(
            self._collection(campaign_id),
            sync,
            f"cannot get {self.label} index from Campaign (ID: {campaign_id})",
        )

    def get(self, campaign_id: int, resource_id: int) -> ModelT:
        path = with_id(self._collection(campaign_id), resource_id, self.label)
        return self._get(path, f"cannot get {self.label} (ID: {resource_id}) from Campaign (ID: {campaign_id})")

    def create(self, campaign_id: int, simple: SimpleT) -> ModelT:
        """Create a resource from ``simple`` and return it as stored by Kanka."""
        path = self._collection(campaign_id)
        return self._create(path, simple, f"cannot create {self.label} for Campaign (ID: {campaign_id})")

    def update(self, campaign_id: int, resource_id: int, simple: SimpleT) -> ModelT:
        path = with_id(self._collection(campaign_id), resource_id, self.label)
        return self._update(
            path, simple, f"cannot update {self.label} (ID: {resource_id}) for Campaign (ID: {campaign_id})"
        )

    def delete(self, campaign_id: int, resource_id: int) -> None:
        path = with_id(self._collection(campaign_id), resource_id, self.label)
        self._delete(path, f"cannot delete {self.label} (ID: {resource_id}) from Campaign (ID: {campaign_id})")


class NestedResourceService(ResourceService[ModelT, SimpleT]):
    """A resource living under a parent resource inside a campaign.

    Subclasses set ``parent`` (the parent's path segment) and
    ``parent_label``.
    """

    parent: Endpoint
    parent_label: str

    def _collection(self, campaign_id: int, parent_id: int) -> Endpoint:
        path = campaign(campaign_id).concat(self.parent)
        return with_id(path, parent_id, self.parent_label).concat(self.end)

    def _describe(self, campaign_id: int, parent_id: int) -> str:
        return f"{self.parent_label} (ID: {parent_id}) in Campaign (ID: {campaign_id})"

    def index(self, campaign_id: int, parent_id: int, sync: datetime | None = None) -> ResourceList[ModelT]:
        """Return every resource belonging to the parent.

        If ``sync`` is given, only resources changed since then are returned.
        """
        return self._index(
            self._collection(campaign_id, parent_id),
            sync,
            f"cannot get {self.label} index from {self._describe(campaign_id, parent_id)}",
        )

    def get(self, campaign_id: int, parent_id: int, resource_id: int) -> ModelT:
        path = with_id(self._collection(campaign_id, parent_id), resource_id, self.label)
        return self._get(
            path, f"cannot get {self.label} (ID: {resource_id}) from {self._describe(campaign_id, parent_id)}"
        )

    def create(self, campaign_id: int, parent_id: int, simple: SimpleT) -> ModelT:
        path = self._collection(campaign_id, parent_id)
        return self._create(path, simple, f"cannot create {self.label} for {self._describe(campaign_id, parent_id)}")

    def update(self, campaign_id: int, parent_id: int, resource_id: int, simple: SimpleT) -> ModelT:
        path = with_id(self._collection(campaign_id, parent_id), resource_id, self.label)
        return self._update(
            path,
            simple,
            f"cannot update {self.label} (ID: {resource_id}) for {self._describe(campaign_id, parent_id)}",
        )

    def delete(self, campaign_id: int, parent_id: int, resource_id: int) -> None:
        path = with_id(self._collection(campaign_id, parent_id), resource_id, self.label)
        self._delete(
            path, f"cannot delete {self.label} (ID: {resource_id}) from {self._describe(campaign_id, parent_id)}"
        )


class EntityResourceService(NestedResourceService[ModelT, SimpleT]):
    """A sub-resource of an entity (``parent_id`` is the entity ID)."""
    parent = endpoints.ENTITY
    parent_label = "Entity"


class LocationResourceService(NestedResourceService[ModelT, SimpleT]):
    parent = endpoints.LOCATION
    parent_label = "Location"


class OrganizationResourceService(NestedResourceService[ModelT, SimpleT]):
    parent = endpoints.ORGANIZATION
    parent_label = "Organization"


class QuestResourceService(NestedResourceService[ModelT, SimpleT]):
    parent = endpoints.QUEST
    parent_label = "Quest"


# Account level
class ProfileService(Service):
    """Client for the current user's profile."""

    def get(self) -> Profile:
        with error_context("cannot get Profile"):
            return self.client.get(self.end, Envelope[Profile]).data


class CampaignService(Service):
    """Client for the campaigns the user has access to."""

    def index(self) -> CampaignList:
        """Return the first page of the user's campaigns.

        Paging is not followed; ``links`` and ``meta`` on the result describe
        the remaining pages.
        """
        with error_context("cannot get Campaign index"):
            return self.client.get(self.end, CampaignList)

    def get(self, campaign_id: int) -> Campaign:
        path = campaign(campaign_id)
        with error_context(f"cannot get Campaign (ID: {campaign_id})"):
            return self.client.get(path, Envelope[Campaign]).data

    def members(self, campaign_id: int) -> ResourceList[Member]:
        """Return the users taking part in the campaign."""
        path = campaign(campaign_id).concat(endpoints.USERS)
        with error_context(f"cannot get Members from Campaign (ID: {campaign_id})"):
            return self.client.get(path, ResourceList[Member])


class SearchService(Service):
    """Client for the campaign-wide search endpoint."""

    def search(self, campaign_id: int, query: str, sync: datetime | None = None) -> ResourceList[SearchResult]:
        """Search the campaign for entities matching ``query``.

        Raises:
            InvalidArgumentError: if the query is empty.
        """
        path = campaign(campaign_id)
        if not query or not query.strip():
            raise InvalidArgumentError("search query cannot be empty")
        path = path.concat(self.end).concat(quote(query, safe=""))
        if sync is not None:
            path = path.with_since(sync)

        with error_context(f"cannot get Search results from Campaign (ID: {campaign_id})"):
            return self.client.get(path, ResourceList[SearchResult])


# Core entities
class CharacterService(CampaignResourceService[Character, SimpleCharacter]):
    model = Character
    label = "Character"


class LocationService(CampaignResourceService[Location, SimpleLocation]):
    model = Location
    label = "Location"


class FamilyService(CampaignResourceService[Family, SimpleFamily]):
    model = Family
    label = "Family"


class OrganizationService(CampaignResourceService[Organization, SimpleOrganization]):
    model = Organization
    label = "Organization"


class ItemService(CampaignResourceService[Item, SimpleItem]):
    model = Item
    label = "Item"


class NoteService(CampaignResourceService[Note, SimpleNote]):
    model = Note
    label = "Note"


class EventService(CampaignResourceService[Event, SimpleEvent]):
    model = Event
    label = "Event"


class CalendarService(CampaignResourceService[Calendar, SimpleCalendar]):
    model = Calendar
    label = "Calendar"


class RaceService(CampaignResourceService[Race, SimpleRace]):
    model = Race
    label = "Race"


class QuestService(CampaignResourceService[Quest, SimpleQuest]):
    model = Quest
    label = "Quest"


class JournalService(CampaignResourceService[Journal, SimpleJournal]):
    model = Journal
    label = "Journal"


class TagService(CampaignResourceService[Tag, SimpleTag]):
    model = Tag
    label = "Tag"


class ConversationService(CampaignResourceService[Conversation, SimpleConversation]):
    model = Conversation
    label = "Conversation"


class DiceRollService(CampaignResourceService[DiceRoll, SimpleDiceRoll]):
    model = DiceRoll
    label = "DiceRoll"


# Entity sub-resources
class AttributeService(EntityResourceService[Attribute, SimpleAttribute]):
    model = Attribute
    label = "Attribute"


class EntityEventService(EntityResourceService[EntityEvent, SimpleEntityEvent]):
    model = EntityEvent
    label = "EntityEvent"


class EntityFileService(EntityResourceService[EntityFile, SimpleEntityFile]):
    model = EntityFile
    label = "EntityFile"

    def create(self, campaign_id: int, parent_id: int, simple: SimpleEntityFile, file: Any) -> EntityFile:
        """Upload ``file`` and attach it to the entity.

        ``file`` is anything httpx accepts as an upload: an open binary file,
        or a ``(filename, content[, content_type])`` tuple. The fields of
        ``simple`` are sent alongside it as multipart form data.
        """
        path = self._collection(campaign_id, parent_id)
        # form fields are text; booleans go as 1/0
        form = {key: int(value) if isinstance(value, bool) else value for key, value in simple.to_payload().items()}
        with error_context(f"cannot create {self.label} for {self._describe(campaign_id, parent_id)}"):
            return self.client.post(path, form, Envelope[EntityFile], files={"file": file}).data


class EntityInventoryService(EntityResourceService[EntityInventory, SimpleEntityInventory]):
    model = EntityInventory
    label = "EntityInventory"


class EntityNoteService(EntityResourceService[EntityNote, SimpleEntityNote]):
    model = EntityNote
    label = "EntityNote"


class EntityTagService(EntityResourceService[EntityTag, SimpleEntityTag]):
    model = EntityTag
    label = "EntityTag"


class RelationService(EntityResourceService[Relation, SimpleRelation]):
    model = Relation
    label = "Relation"


# Nested under locations, organisations and quests
class MapPointService(LocationResourceService[MapPoint, SimpleMapPoint]):
    model = MapPoint
    label = "MapPoint"


class OrganizationMemberService(OrganizationResourceService[OrganizationMember, SimpleOrganizationMember]):
    model = OrganizationMember
    label = "OrganizationMember"


class QuestCharacterService(QuestResourceService[QuestCharacter, SimpleQuestCharacter]):
    model = QuestCharacter
    label = "QuestCharacter"


class QuestItemService(QuestResourceService[QuestItem, SimpleQuestItem]):
    model = QuestItem
    label = "QuestItem"


class QuestLocationService(QuestResourceService[QuestLocation, SimpleQuestLocation]):
    model = QuestLocation
    label = "QuestLocation"


class QuestOrganizationService(QuestResourceService[QuestOrganization, SimpleQuestOrganization]):
    model = QuestOrganization
    label = "QuestOrganization"
