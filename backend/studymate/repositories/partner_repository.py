"""
StudyMate Backend — Partner Repository
========================================

What:  Storage access for the `partners` collection.
Who:   Injected into the /partners route handlers.

Operations:
    list_partners()         find + optional subject regex + optional experience sort
    get_partner()           find_one by _id
    create_partner()        insert_one, payload stored as-is
    adjust_partner_count()  single conditional update_one with $inc

Counter Invariant:
    partnerCount never drops below zero. The decrement filter includes
    {"partnerCount": {"$gt": 0}}, so MongoDB applies the check and the $inc
    atomically in one command; concurrent decrements cannot overshoot.
    When the filter matches nothing the caller gets NotFoundError, whether
    the record is missing or its count is already zero.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from bson.errors import BSONError
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from studymate.exceptions import DatabaseError, NotFoundError, ValidationError
from studymate.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

SORT_DIRECTIONS = {"asc": ASCENDING, "desc": DESCENDING}


class PartnerRepository(BaseRepository):
    """CRUD, filter and counter access to partner documents."""

    resource = "partner"

    async def list_partners(
        self,
        subject: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        List partners, optionally filtered by subject and sorted by experience.

        Args:
            subject: Case-insensitive substring of the `subject` field. Matched
                     literally (regex metacharacters are escaped). Empty = no filter.
            sort:    "asc" or "desc" on `experience`; None or empty keeps natural order.

        Raises:
            ValidationError: `sort` is not "asc"/"desc" (→ 400)
            DatabaseError: Query failed (→ 500)
        """
        if sort and sort not in SORT_DIRECTIONS:
            raise ValidationError(
                message=f"Invalid sort '{sort}'. Must be one of: asc, desc",
                field="sort",
            )

        query: Dict[str, Any] = {}
        if subject:
            query["subject"] = {"$regex": re.escape(subject), "$options": "i"}

        try:
            cursor = self.collection.find(query)
            if sort:
                cursor = cursor.sort("experience", SORT_DIRECTIONS[sort])
            documents = await cursor.to_list()
        except PyMongoError as e:
            logger.error("Database error listing partners: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error loading partners",
                context={"subject": subject, "sort": sort, "error_type": type(e).__name__},
            ) from e

        return [self._serialize(doc) for doc in documents]

    async def get_partner(self, partner_id: str) -> Dict[str, Any]:
        """
        Fetch one partner.

        Raises:
            ValidationError: Malformed identifier (→ 400)
            NotFoundError: No partner with that identifier (→ 404)
            DatabaseError: Query failed (→ 500)
        """
        oid = self._object_id(partner_id)
        try:
            document = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Database error fetching partner %s: %s", partner_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the partner. Please try again.",
                context={"partner_id": partner_id},
            ) from e

        if document is None:
            raise NotFoundError(resource=self.resource, resource_id=partner_id)
        return self._serialize(document)

    async def create_partner(self, payload: Mapping[str, Any]) -> str:
        """
        Insert a partner exactly as supplied.

        Returns:
            The new document identifier as a hex string.
        """
        try:
            result = await self.collection.insert_one(dict(payload))
        except (PyMongoError, BSONError, OverflowError) as e:
            # BSON encoding runs client-side; ints beyond 64 bits raise OverflowError
            logger.error("Database error creating partner: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to add partner",
                context={"error_type": type(e).__name__},
            ) from e

        inserted_id = str(result.inserted_id)
        logger.info("Partner created: %s", inserted_id)
        return inserted_id

    async def adjust_partner_count(self, partner_id: str, delta: int) -> None:
        """
        Increment (+1) or decrement (-1) `partnerCount` in one atomic update.

        Raises:
            ValidationError: Malformed identifier, or delta other than +1/-1 (→ 400)
            NotFoundError: No match; for -1 this includes a count already at zero (→ 404)
            DatabaseError: Update failed (→ 500)
        """
        if delta not in (1, -1):
            raise ValidationError(
                message="partnerCount can only change by +1 or -1",
                field="delta",
                context={"delta": delta},
            )

        query: Dict[str, Any] = {"_id": self._object_id(partner_id)}
        if delta < 0:
            query["partnerCount"] = {"$gt": 0}

        try:
            result = await self.collection.update_one(query, {"$inc": {"partnerCount": delta}})
        except PyMongoError as e:
            logger.error("Database error adjusting partner %s count: %s", partner_id, str(e))
            raise DatabaseError(
                message="Error increasing count" if delta > 0 else "Error decreasing count",
                context={"partner_id": partner_id, "delta": delta},
            ) from e

        if result.matched_count == 0:
            logger.info("Partner %s count not changed by %+d: no match", partner_id, delta)
            raise NotFoundError(resource=self.resource, resource_id=partner_id)

        logger.info("Partner %s partnerCount %+d", partner_id, delta)
