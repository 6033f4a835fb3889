"""
StudyMate Backend — Partner Request Repository Unit Tests
===========================================================

What:  Tests for PartnerRequestRepository (create, list, patch, delete).

What we test:
    ✅ requestedAt is stamped by the server
    ✅ Listing without an email returns [] even when requests exist
    ✅ Exact (case-sensitive) email matching
    ✅ Partial update only writes provided, truthy fields
    ✅ Delete of an unknown id leaves other records alone
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from studymate.exceptions import DatabaseError, NotFoundError, ValidationError
from studymate.repositories import PartnerRequestRepository


@pytest.fixture
def request_payload():
    return {
        "requestedBy": "sam@example.com",
        "partnerName": "Alice",
        "subject": "Math",
        "studyMode": "online",
    }


class TestPartnerRequestCreate:

    @pytest.mark.asyncio
    async def test_create_stamps_requested_at(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)
        before = datetime.now(timezone.utc)

        request_id = await repository.create_request(request_payload)

        stored = requests_collection.documents[0]
        assert str(stored["_id"]) == request_id
        assert before <= stored["requestedAt"] <= datetime.now(timezone.utc)
        assert "requestedAt" not in request_payload

    @pytest.mark.asyncio
    async def test_create_overrides_client_timestamp(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)

        await repository.create_request({**request_payload, "requestedAt": "1999-01-01"})

        assert isinstance(requests_collection.documents[0]["requestedAt"], datetime)

    @pytest.mark.asyncio
    async def test_create_database_failure(self, mock_collection, request_payload):
        mock_collection.insert_one.side_effect = AutoReconnect("connection reset")
        repository = PartnerRequestRepository(mock_collection)

        with pytest.raises(DatabaseError):
            await repository.create_request(request_payload)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [InvalidDocument("cannot encode object"), OverflowError("int too large")],
    )
    async def test_create_unencodable_payload(self, mock_collection, request_payload, error):
        mock_collection.insert_one.side_effect = error
        repository = PartnerRequestRepository(mock_collection)

        with pytest.raises(DatabaseError, match="Failed to create request"):
            await repository.create_request(request_payload)


class TestPartnerRequestList:

    @pytest.mark.asyncio
    async def test_missing_email_returns_empty_list(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)
        await repository.create_request(request_payload)

        assert await repository.list_requests_by_requester(None) == []
        assert await repository.list_requests_by_requester("") == []

    @pytest.mark.asyncio
    async def test_missing_email_never_queries_storage(self, mock_collection):
        repository = PartnerRequestRepository(mock_collection)

        await repository.list_requests_by_requester(None)

        mock_collection.find.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_match_is_exact(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)
        await repository.create_request(request_payload)
        await repository.create_request({**request_payload, "requestedBy": "Sam@Example.com"})
        await repository.create_request({**request_payload, "requestedBy": "kim@example.com"})

        result = await repository.list_requests_by_requester("sam@example.com")

        assert len(result) == 1
        assert result[0]["requestedBy"] == "sam@example.com"
        assert isinstance(result[0]["_id"], str)
        assert isinstance(result[0]["requestedAt"], str)

    @pytest.mark.asyncio
    async def test_list_database_failure(self, mock_collection):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(side_effect=ServerSelectionTimeoutError("cluster down"))
        mock_collection.find.return_value = cursor
        repository = PartnerRequestRepository(mock_collection)

        with pytest.raises(DatabaseError, match="Failed to load requests"):
            await repository.list_requests_by_requester("sam@example.com")
        mock_collection.find.assert_called_once_with({"requestedBy": "sam@example.com"})


class TestPartnerRequestUpdate:

    @pytest.mark.asyncio
    async def test_update_changes_only_given_field(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)
        request_id = await repository.create_request(request_payload)
        original = dict(requests_collection.documents[0])

        applied = await repository.update_request(request_id, {"subject": "Biology"})

        stored = requests_collection.documents[0]
        assert applied == {"subject": "Biology"}
        assert stored["subject"] == "Biology"
        assert stored["partnerName"] == "Alice"
        assert stored["studyMode"] == "online"
        assert stored["requestedAt"] == original["requestedAt"]

    @pytest.mark.asyncio
    async def test_update_skips_falsy_and_unknown_fields(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)
        request_id = await repository.create_request(request_payload)

        applied = await repository.update_request(
            request_id,
            {"partnerName": "", "studyMode": "offline", "requestedBy": "evil@example.com"},
        )

        stored = requests_collection.documents[0]
        assert applied == {"studyMode": "offline"}
        assert stored["partnerName"] == "Alice"
        assert stored["requestedBy"] == "sam@example.com"

    @pytest.mark.asyncio
    async def test_update_with_nothing_to_apply(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)
        request_id = await repository.create_request(request_payload)

        assert await repository.update_request(request_id, {}) == {}

    @pytest.mark.asyncio
    async def test_update_unknown_id_raises_not_found(self, requests_collection):
        repository = PartnerRequestRepository(requests_collection)

        with pytest.raises(NotFoundError):
            await repository.update_request(str(ObjectId()), {"subject": "Biology"})
        with pytest.raises(NotFoundError):
            await repository.update_request(str(ObjectId()), {})

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, requests_collection):
        repository = PartnerRequestRepository(requests_collection)

        with pytest.raises(ValidationError):
            await repository.update_request("xyz", {"subject": "Biology"})

    @pytest.mark.asyncio
    async def test_update_database_failure(self, mock_collection):
        mock_collection.update_one.side_effect = AutoReconnect("connection reset")
        repository = PartnerRequestRepository(mock_collection)

        with pytest.raises(DatabaseError, match="Failed to update request"):
            await repository.update_request(str(ObjectId()), {"subject": "Biology"})

    @pytest.mark.asyncio
    async def test_existence_check_failure(self, mock_collection):
        mock_collection.count_documents.side_effect = AutoReconnect("connection reset")
        repository = PartnerRequestRepository(mock_collection)

        with pytest.raises(DatabaseError, match="Failed to update request"):
            await repository.update_request(str(ObjectId()), {})
        mock_collection.update_one.assert_not_awaited()


class TestPartnerRequestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_record(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)
        request_id = await repository.create_request(request_payload)

        await repository.delete_request(request_id)

        assert requests_collection.documents == []

    @pytest.mark.asyncio
    async def test_delete_unknown_id_leaves_others(self, requests_collection, request_payload):
        repository = PartnerRequestRepository(requests_collection)
        await repository.create_request(request_payload)

        with pytest.raises(NotFoundError):
            await repository.delete_request(str(ObjectId()))

        assert len(requests_collection.documents) == 1

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, mock_collection):
        repository = PartnerRequestRepository(mock_collection)

        with pytest.raises(ValidationError):
            await repository.delete_request("not-an-id")
        mock_collection.delete_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_database_failure(self, mock_collection):
        mock_collection.delete_one.side_effect = ServerSelectionTimeoutError("cluster down")
        repository = PartnerRequestRepository(mock_collection)

        with pytest.raises(DatabaseError, match="Failed to delete request"):
            await repository.delete_request(str(ObjectId()))
