"""
StudyMate Backend — Partner Request Repository
================================================

What:  Storage access for the `partnerRequests` collection.
Who:   Injected into the /partner-requests route handlers.

Field rules:
    requestedAt  stamped by the server on insert (UTC), never updated
    requestedBy  exact-match lookup key; listing without it returns []
    partnerName, subject, studyMode
                 the only fields a PATCH may change; falsy values are skipped
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from bson.errors import BSONError
from pymongo.errors import PyMongoError

from studymate.exceptions import DatabaseError, NotFoundError
from studymate.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("partnerName", "subject", "studyMode")


class PartnerRequestRepository(BaseRepository):
    """Create, list, patch and delete connection requests."""

    resource = "partner request"

    async def create_request(self, payload: Mapping[str, Any]) -> str:
        """
        Insert a request with a server-side `requestedAt` timestamp.

        A caller-supplied `requestedAt` is overwritten.
        """
        document = {**payload, "requestedAt": datetime.now(timezone.utc)}
        try:
            result = await self.collection.insert_one(document)
        except (PyMongoError, BSONError, OverflowError) as e:
            logger.error("Database error creating partner request: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create request",
                context={"error_type": type(e).__name__},
            ) from e

        inserted_id = str(result.inserted_id)
        logger.info("Partner request created: %s", inserted_id)
        return inserted_id

    async def list_requests_by_requester(self, email: Optional[str]) -> List[Dict[str, Any]]:
        """
        Requests whose `requestedBy` equals `email` exactly.

        No email means no results; the collection is never listed unfiltered.
        """
        if not email:
            return []

        try:
            documents = await self.collection.find({"requestedBy": email}).to_list()
        except PyMongoError as e:
            logger.error("Database error listing partner requests: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to load requests",
                context={"error_type": type(e).__name__},
            ) from e

        return [self._serialize(doc) for doc in documents]

    async def update_request(
        self,
        request_id: str,
        fields: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Apply the truthy updatable values in `fields` with a single $set.

        Returns:
            The fields actually written (possibly empty).

        Raises:
            ValidationError: Malformed identifier (→ 400)
            NotFoundError: No request with that identifier (→ 404)
            DatabaseError: Update failed (→ 500)
        """
        oid = self._object_id(request_id)
        updates = {name: fields[name] for name in UPDATABLE_FIELDS if fields.get(name)}

        try:
            if updates:
                result = await self.collection.update_one({"_id": oid}, {"$set": updates})
                matched = result.matched_count
            else:
                # $set with an empty document is rejected by the server
                matched = await self.collection.count_documents({"_id": oid}, limit=1)
        except PyMongoError as e:
            logger.error("Database error updating partner request %s: %s", request_id, str(e))
            raise DatabaseError(
                message="Failed to update request",
                context={"request_id": request_id, "fields": sorted(updates)},
            ) from e

        if not matched:
            raise NotFoundError(resource=self.resource, resource_id=request_id)

        logger.info("Partner request %s updated: %s", request_id, ", ".join(updates) or "nothing")
        return updates

    async def delete_request(self, request_id: str) -> None:
        """
        Remove one request.

        Raises:
            ValidationError: Malformed identifier (→ 400)
            NotFoundError: Nothing was deleted (→ 404)
            DatabaseError: Delete failed (→ 500)
        """
        oid = self._object_id(request_id)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Database error deleting partner request %s: %s", request_id, str(e))
            raise DatabaseError(
                message="Failed to delete request",
                context={"request_id": request_id},
            ) from e

        if result.deleted_count == 0:
            raise NotFoundError(resource=self.resource, resource_id=request_id)

        logger.info("Partner request deleted: %s", request_id)
