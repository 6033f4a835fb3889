"""
StudyMate Backend — Partner Request Schemas
=============================================

What:  Request/response models for PATCH /partner-requests/{id}.
Why:   The partial update is the only body with a fixed shape; declaring it
       documents which fields are updatable and drops everything else.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class PartnerRequestUpdate(BaseModel):
    """
    Fields a requester may change after creation.

    Absent, null or empty values mean "leave unchanged"; `requestedBy` and
    `requestedAt` are not updatable and are ignored if sent.
    """
    partner_name: Optional[str] = Field(default=None, alias="partnerName")
    subject: Optional[str] = Field(default=None)
    study_mode: Optional[str] = Field(default=None, alias="studyMode")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class PartnerRequestUpdateResponse(BaseModel):
    """
    What:  Result of a partial update.
    How:   `updatedFields` holds exactly the fields written to storage,
           keyed by their stored (camelCase) names.
    """
    success: bool = Field(default=True)
    updated_fields: Dict[str, Any] = Field(alias="updatedFields")

    model_config = {"populate_by_name": True}
