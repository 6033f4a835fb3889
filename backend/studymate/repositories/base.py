"""
StudyMate Backend — Repository Base Class
===========================================

What:  Helpers shared by the collection repositories.
How:   Holds the collection handle, parses path identifiers into ObjectIds,
       and converts stored documents into JSON-ready dicts.
"""

import logging
from typing import Any, Dict, Mapping

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pymongo.asynchronous.collection import AsyncCollection

from studymate.exceptions import ValidationError

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    Base class for repositories providing common helpers.

    Attributes:
        resource:    Name used in NotFoundError messages ("partner", ...)
        collection:  The collection every operation runs against
    """

    resource = "document"

    def __init__(self, collection: AsyncCollection) -> None:
        self.collection = collection

    def _object_id(self, raw_id: str) -> ObjectId:
        """
        Parse a path identifier.

        Raises:
            ValidationError: `raw_id` is not a 24-character hex ObjectId (→ 400)
        """
        if not ObjectId.is_valid(raw_id):
            raise ValidationError(
                message="Invalid ID",
                field="id",
                context={"resource": self.resource, "value": str(raw_id)[:64]},
            )
        return ObjectId(raw_id)

    @staticmethod
    def _serialize(document: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Convert a stored document to a JSON-ready dict.

        `_id` (and any nested ObjectId) becomes its hex string; datetimes become
        ISO 8601 strings.
        """
        return jsonable_encoder(dict(document), custom_encoder={ObjectId: str})
