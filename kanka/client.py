"""
Synchronous HTTP client for the Kanka API.

The Client builds authenticated requests, sends them through httpx and
decodes the JSON responses into Pydantic models. It owns one service per
Kanka endpoint (``client.characters``, ``client.attributes`` ...).
"""

import logging
from datetime import datetime
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from . import endpoints
from .endpoints import Endpoint
from .errors import DecodeError, RequestBuildError, ServerError, TransportError, is_success
from .models import ResourceList, SearchResult
from .services import (
    AttributeService,
    CalendarService,
    CampaignService,
    CharacterService,
    ConversationService,
    DiceRollService,
    EntityEventService,
    EntityFileService,
    EntityInventoryService,
    EntityNoteService,
    EntityTagService,
    EventService,
    FamilyService,
    ItemService,
    JournalService,
    LocationService,
    MapPointService,
    NoteService,
    OrganizationMemberService,
    OrganizationService,
    ProfileService,
    QuestCharacterService,
    QuestItemService,
    QuestLocationService,
    QuestOrganizationService,
    QuestService,
    RaceService,
    RelationService,
    SearchService,
    TagService,
)
from .settings import KANKA_URL, KankaSettings, get_settings

logger = logging.getLogger("kanka.client")

ModelT = TypeVar("ModelT", bound=BaseModel)

# Asks Kanka to expand nested attributes, notes, relations etc.
RELATED_PARAMS = {"related": 1}


class Client:
    """Handles communication between the user and the Kanka API.

    Every request is authenticated with the user's OAuth token. A custom
    ``httpx.Client`` may be supplied (for proxies, or a stub transport in
    tests); otherwise a default one is created. A supplied client stays open
    after ``close()``; its owner closes it.
    """

    def __init__(
        self,
        token: str,
        base_url: str = KANKA_URL,
        http_client: httpx.Client | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.token = token
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

        self.profiles = ProfileService(self, endpoints.PROFILE)
        self.campaigns = CampaignService(self, endpoints.CAMPAIGN)
        self.characters = CharacterService(self, endpoints.CHARACTER)
        self.locations = LocationService(self, endpoints.LOCATION)
        self.families = FamilyService(self, endpoints.FAMILY)
        self.organizations = OrganizationService(self, endpoints.ORGANIZATION)
        self.items = ItemService(self, endpoints.ITEM)
        self.notes = NoteService(self, endpoints.NOTE)
        self.events = EventService(self, endpoints.EVENT)
        self.calendars = CalendarService(self, endpoints.CALENDAR)
        self.races = RaceService(self, endpoints.RACE)
        self.quests = QuestService(self, endpoints.QUEST)
        self.journals = JournalService(self, endpoints.JOURNAL)
        self.tags = TagService(self, endpoints.TAG)
        self.conversations = ConversationService(self, endpoints.CONVERSATION)
        self.dice_rolls = DiceRollService(self, endpoints.DICE_ROLL)

        self.attributes = AttributeService(self, endpoints.ATTRIBUTE)
        self.entity_events = EntityEventService(self, endpoints.ENTITY_EVENT)
        self.entity_files = EntityFileService(self, endpoints.ENTITY_FILE)
        self.entity_inventories = EntityInventoryService(self, endpoints.ENTITY_INVENTORY)
        self.entity_notes = EntityNoteService(self, endpoints.ENTITY_NOTE)
        self.entity_tags = EntityTagService(self, endpoints.ENTITY_TAG)
        self.relations = RelationService(self, endpoints.RELATION)

        self.map_points = MapPointService(self, endpoints.MAP_POINT)
        self.organization_members = OrganizationMemberService(self, endpoints.ORGANIZATION_MEMBER)
        self.quest_characters = QuestCharacterService(self, endpoints.QUEST_CHARACTER)
        self.quest_items = QuestItemService(self, endpoints.QUEST_ITEM)
        self.quest_locations = QuestLocationService(self, endpoints.QUEST_LOCATION)
        self.quest_organizations = QuestOrganizationService(self, endpoints.QUEST_ORGANIZATION)

        self._search = SearchService(self, endpoints.SEARCH)

    @classmethod
    def from_settings(
        cls,
        settings: KankaSettings | None = None,
        http_client: httpx.Client | None = None,
    ) -> "Client":
        """Create a client from KANKA_* environment variables or a ``.env`` file."""
        settings = settings or get_settings()
        return cls(
            settings.token.get_secret_value(),
            base_url=settings.base_url,
            http_client=http_client,
            timeout=settings.timeout,
        )

    def close(self):
        """Close the HTTP client if this Client created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def search(self, campaign_id: int, query: str, sync: datetime | None = None) -> ResourceList[SearchResult]:
        """Search the campaign for entities matching ``query``."""
        return self._search.search(campaign_id, query, sync)

    def request(
        self,
        method: str,
        end: Endpoint,
        body: Any = None,
        params: dict | None = None,
        files: dict | None = None,
    ) -> httpx.Request:
        """Build an authenticated request for ``end`` relative to the base URL.

        The body is sent as JSON, or as multipart form fields when ``files``
        is given.
        """
        url = self.base_url + end
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }
        try:
            if files is not None:
                return self._http.build_request(method, url, headers=headers, data=body, files=files, params=params)
            return self._http.build_request(method, url, headers=headers, json=body, params=params)
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            raise RequestBuildError(
                f"cannot create request with method '{method}' for url '{url}': {e}"
            ) from e

    def send(self, request: httpx.Request, destination: type[ModelT]) -> ModelT:
        """Execute ``request`` and decode its JSON body into ``destination``."""
        response = self._execute(request)
        try:
            return destination.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(
                f"cannot decode response body: {e}",
                status_code=response.status_code,
                body=response.content,
            ) from e

    def _execute(self, request: httpx.Request) -> httpx.Response:
        logger.debug(f"{request.method} {request.url}")
        try:
            response = self._http.send(request)
        except httpx.HTTPError as e:
            logger.error(f"HTTP request failed: {e}")
            raise TransportError(
                f"http client cannot send request with method '{request.method}' to url '{request.url}': {e}"
            ) from e

        if not is_success(response.status_code):
            error = ServerError.from_response(response)
            logger.warning(f"{request.method} {request.url} failed: {error}")
            raise error

        return response

    def get(self, end: Endpoint, destination: type[ModelT]) -> ModelT:
        """Make a GET request with nested resources expanded."""
        return self.send(self.request("GET", end, params=RELATED_PARAMS), destination)

    def post(self, end: Endpoint, body: Any, destination: type[ModelT], files: dict | None = None) -> ModelT:
        """Make a POST request with a JSON body, or a multipart one if ``files`` is given."""
        return self.send(self.request("POST", end, body=body, files=files), destination)

    def put(self, end: Endpoint, body: Any, destination: type[ModelT]) -> ModelT:
        """Make a PUT request with a JSON body."""
        return self.send(self.request("PUT", end, body=body), destination)

    def delete(self, end: Endpoint) -> None:
        """Make a DELETE request. The response body is ignored."""
        self._execute(self.request("DELETE", end))
