"""Tests for the badge identifier registry."""

from uuid import UUID

import pytest

from badgecount.core.modules.badge.service import parse_badge_id
from badgecount.errors import BadRequestError, InvalidLabelError, StoreUnavailableError


@pytest.fixture
def badges(app):
    return app._core.services.badge


class TestParseBadgeId:
    """Tests for parse_badge_id."""

    def test_canonical_form(self):
        assert parse_badge_id("0f8fad5b-d9cb-469f-a165-70867728950e") == UUID("0f8fad5b-d9cb-469f-a165-70867728950e")

    def test_uppercase_hex_accepted(self):
        assert parse_badge_id("0F8FAD5B-D9CB-469F-A165-70867728950E") == UUID("0f8fad5b-d9cb-469f-a165-70867728950e")

    @pytest.mark.parametrize(
        "raw",
        [
            "0f8fad5bd9cb469fa16570867728950e",
            "{0f8fad5b-d9cb-469f-a165-70867728950e}",
            "urn:uuid:0f8fad5b-d9cb-469f-a165-70867728950e",
            "0f8fad5b-d9cb469f-a165-70867728950e",
        ],
    )
    def test_non_canonical_forms_rejected(self, raw):
        with pytest.raises(BadRequestError):
            parse_badge_id(raw)

    @pytest.mark.parametrize("raw", ["", "not-a-uuid", "0f8fad5b-d9cb-469f-a165", "0f8fad5b-d9cb-469f-a165-70867728950e-extra"])
    def test_malformed_rejected(self, raw):
        with pytest.raises(BadRequestError):
            parse_badge_id(raw)


class TestCreateBadge:
    """Tests for BadgeService.create_badge."""

    @pytest.mark.asyncio
    async def test_new_badge_starts_at_zero(self, badges, store):
        badge = await badges.create_badge("visits")
        assert badge.count == 0
        assert badge.label == "visits"
        assert store.documents[badge.id]["count"] == 0

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, badges):
        ids = {(await badges.create_badge()).id for _ in range(50)}
        assert len(ids) == 50

    @pytest.mark.asyncio
    async def test_empty_label_stored_as_none(self, badges):
        badge = await badges.create_badge("")
        assert badge.label is None

    @pytest.mark.asyncio
    async def test_invalid_label_writes_nothing(self, badges, store):
        with pytest.raises(InvalidLabelError):
            await badges.create_badge("bad\nlabel")
        assert store.documents == {}

    @pytest.mark.asyncio
    async def test_store_failure_returns_no_id(self, badges, store):
        """Test that a failed write raises instead of handing out an id."""
        store.unavailable = True
        with pytest.raises(StoreUnavailableError):
            await badges.create_badge("visits")
        assert store.documents == {}


class TestExists:
    """Tests for BadgeService.exists."""

    @pytest.mark.asyncio
    async def test_registered_badge_exists(self, badges):
        badge = await badges.create_badge()
        assert await badges.exists(badge.id) is True

    @pytest.mark.asyncio
    async def test_unregistered_badge_does_not_exist(self, badges):
        assert await badges.exists(UUID("12345678-1234-5678-1234-567812345678")) is False

    @pytest.mark.asyncio
    async def test_store_failure_is_not_reported_as_missing(self, badges, store):
        badge = await badges.create_badge()
        store.unavailable = True
        with pytest.raises(StoreUnavailableError):
            await badges.exists(badge.id)
