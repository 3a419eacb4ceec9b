"""
Main API router.
"""

from fastapi import APIRouter
from subwatch.api import subscriptions, events

api_router = APIRouter()

api_router.include_router(subscriptions.router)
api_router.include_router(events.router)
