"""
StudyMate Backend — Repository Dependencies
=============================================

What:  FastAPI dependencies that build a repository per request.
Why:   Handlers receive an explicitly constructed repository instead of
       reaching for module-level collection globals; tests swap them out
       through `app.dependency_overrides`.

Both are `async def` so FastAPI resolves them on the event loop, where the
asyncio MongoDB client is created on first use (sync dependencies would run
in a worker thread).
"""

from studymate.config import settings
from studymate.database import get_database
from studymate.repositories import PartnerRepository, PartnerRequestRepository


async def get_partner_repository() -> PartnerRepository:
    return PartnerRepository(get_database()[settings.partners_collection])


async def get_partner_request_repository() -> PartnerRequestRepository:
    return PartnerRequestRepository(get_database()[settings.partner_requests_collection])
