from datetime import datetime, timedelta, timezone

import httpx
import pytest

from kanka import endpoints
from kanka.endpoints import Endpoint, format_timestamp
from kanka.errors import InvalidIDError


class TestWithID:
    @pytest.mark.parametrize("resource_id", [0, 1, 5272, 2**31, 2**63 - 1])
    def test_appends_id(self, resource_id):
        end = endpoints.CHARACTER.with_id(resource_id)
        assert end == f"characters/{resource_id}"
        assert isinstance(end, Endpoint)

    @pytest.mark.parametrize("resource_id", [-1, -123, -(2**31)])
    def test_negative_id(self, resource_id):
        with pytest.raises(InvalidIDError) as exc:
            endpoints.CHARACTER.with_id(resource_id)
        assert exc.value.resource_id == resource_id
        assert str(exc.value) == f"provided ID ({resource_id}) cannot be negative"

    @pytest.mark.parametrize("resource_id", [True, "12", 1.5, None])
    def test_non_integer_id(self, resource_id):
        with pytest.raises(InvalidIDError):
            endpoints.CHARACTER.with_id(resource_id)

    def test_receiver_is_unchanged(self):
        base = Endpoint("campaigns")
        base.with_id(5)
        assert base == "campaigns"


class TestConcat:
    def test_concat_adds_separator(self):
        end = endpoints.CAMPAIGN.with_id(5272).concat(endpoints.ENTITY).with_id(7).concat(endpoints.ATTRIBUTE)
        assert end == "campaigns/5272/entities/7/attributes"

    def test_append_is_raw(self):
        assert Endpoint("profile").append(".json") == "profile.json"

    def test_constants(self):
        assert endpoints.ORGANIZATION == "organisations"
        assert endpoints.ORGANIZATION_MEMBER == "organisation_members"
        assert endpoints.QUEST_ORGANIZATION == "quest_organisations"
        assert endpoints.ENTITY_INVENTORY == "inventory"
        assert endpoints.USERS == "users"


class TestWithSince:
    def sync_value(self, end: Endpoint) -> str:
        return httpx.URL("https://kanka.test/" + end).params[endpoints.SYNC_PARAM]

    def test_adds_query(self):
        end = endpoints.CHARACTER.with_since(datetime(2019, 9, 6, 19, 17, 2, tzinfo=timezone.utc))
        assert end.startswith("characters?lastSync=")
        assert self.sync_value(end) == "2019-09-06T19:17:02Z"

    def test_naive_time_is_utc(self):
        end = endpoints.CHARACTER.with_since(datetime(2020, 1, 2, 3, 4, 5))
        assert self.sync_value(end) == "2020-01-02T03:04:05Z"

    def test_offset_is_kept(self):
        since = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        end = endpoints.CHARACTER.with_since(since)
        assert self.sync_value(end) == "2020-01-02T03:04:05+02:00"

    def test_existing_query(self):
        end = Endpoint("search/shop?page=2").with_since(datetime(2020, 1, 2))
        assert "?page=2&lastSync=" in end
        assert self.sync_value(end) == "2020-01-02T00:00:00Z"


def test_format_timestamp():
    assert format_timestamp(datetime(2019, 9, 6, 19, 17, 2, 123456, tzinfo=timezone.utc)) == "2019-09-06T19:17:02Z"
    assert format_timestamp(datetime(2019, 9, 6)) == "2019-09-06T00:00:00Z"
