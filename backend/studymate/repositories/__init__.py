# Repositories package init
"""
StudyMate Backend — Repositories Layer
========================================

What:  Storage access objects, one per MongoDB collection.
Why:   Routes stay thin; each repository owns its collection handle and
       translates driver results into plain JSON-ready dicts or typed errors.

Repository Inventory:
    - PartnerRepository:         partners         (list/filter/sort, get, create, counter)
    - PartnerRequestRepository:  partnerRequests  (create, list by requester, patch, delete)

Every public method issues a single storage command. Atomicity beyond one
document is not attempted.
"""

from studymate.repositories.partner_repository import PartnerRepository
from studymate.repositories.partner_request_repository import PartnerRequestRepository

__all__ = ["PartnerRepository", "PartnerRequestRepository"]
