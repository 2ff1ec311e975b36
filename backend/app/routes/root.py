"""
Product API: Root Route
=========================

GET / returns a plain-text welcome message. It is not exempt from
authentication.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Root"])

WELCOME_MESSAGE = "Welcome to the Product API! Go to /api/products to see all products."


@router.get("/", response_class=PlainTextResponse, summary="Welcome message")
async def root() -> str:
    return WELCOME_MESSAGE
