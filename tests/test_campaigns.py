from datetime import datetime, timezone

import pytest

from kanka.errors import InvalidArgumentError, InvalidIDError, ServerError
from kanka.models import CampaignList, SearchResult

CAMPAIGN_ID = 5272


class TestProfile:
    def test_get(self, client, server):
        server.respond(file="profile.json")

        profile = client.profiles.get()

        assert server.last_path() == "profile"
        assert profile.id == 5600
        assert profile.last_campaign_id == CAMPAIGN_ID
        assert not profile.is_patreon


class TestCampaigns:
    def test_index(self, client, server):
        server.respond(file="campaign_index.json")

        campaigns = client.campaigns.index()

        assert server.last_path() == "campaigns"
        assert isinstance(campaigns, CampaignList)
        assert [c.name for c in campaigns] == ["Mechanus"]
        assert campaigns[0].members[0].user.name == "Henry"
        # only the first page is fetched
        assert len(server.requests) == 1
        assert campaigns.meta.last_page == 2
        assert campaigns.meta.from_ == 1
        assert campaigns.links.next.endswith("page=2")

    def test_get(self, client, server):
        server.respond(body={"data": {"id": CAMPAIGN_ID, "name": "Mechanus", "locale": "en", "members": []}})

        campaign = client.campaigns.get(CAMPAIGN_ID)

        assert server.last_path() == "campaigns/5272"
        assert campaign.name == "Mechanus"
        assert campaign.members == []

    def test_get_invalid_id(self, client, server):
        with pytest.raises(InvalidIDError, match="invalid Campaign ID"):
            client.campaigns.get(-1)
        assert server.requests == []

    def test_members(self, client, server):
        server.respond(body={"data": [
            {"id": 7006, "user": {"id": 5600, "name": "Henry"}},
            {"id": 7007, "user": {"id": 5601, "name": "Clara", "avatar": None}},
        ]})

        members = client.campaigns.members(CAMPAIGN_ID)

        assert server.last_path() == "campaigns/5272/users"
        assert [m.user.name for m in members] == ["Henry", "Clara"]

    def test_members_error(self, client, server):
        server.respond(403)
        with pytest.raises(ServerError, match="^cannot get Members from Campaign \\(ID: 5272\\)"):
            client.campaigns.members(CAMPAIGN_ID)


class TestSearch:
    def test_results(self, client, server):
        server.respond(file="search.json")

        results = client.search(CAMPAIGN_ID, "shop")

        assert server.last_path() == "campaigns/5272/search/shop"
        assert all(isinstance(r, SearchResult) for r in results)
        assert [r.name for r in results] == ["Shop", "The Rope Shop"]
        assert results[1].type == "location"

    def test_query_is_escaped(self, client, server):
        server.respond(file="search.json")

        client.search(CAMPAIGN_ID, "rope/shop?")

        assert server.last.url.raw_path.decode().startswith("/api/1.0/campaigns/5272/search/rope%2Fshop%3F")

    @pytest.mark.parametrize("query", ["", "   "])
    def test_empty_query(self, client, server, query):
        with pytest.raises(InvalidArgumentError, match="search query cannot be empty"):
            client.search(CAMPAIGN_ID, query)
        assert server.requests == []

    def test_invalid_campaign(self, client, server):
        with pytest.raises(InvalidIDError, match="invalid Campaign ID"):
            client.search(-1, "shop")
        assert server.requests == []

    def test_sync(self, client, server):
        server.respond(file="search.json")

        client.search(CAMPAIGN_ID, "shop", sync=datetime(2019, 9, 6, tzinfo=timezone.utc))

        assert server.last_path() == "campaigns/5272/search/shop"
        assert server.last.url.params["lastSync"] == "2019-09-06T00:00:00Z"
