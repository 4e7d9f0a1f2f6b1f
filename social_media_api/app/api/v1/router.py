"""
Top-level router for version 1 of the API.

This router aggregates the domain-specific routers.  The account
router defines ``/register``, ``/login`` and
``/accounts/{account_id}/messages`` itself, so it is included without a
prefix.
"""

from fastapi import APIRouter

from .endpoints import accounts, health, messages


router = APIRouter()

router.include_router(accounts.router, tags=["accounts"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
router.include_router(health.router, tags=["health"])
