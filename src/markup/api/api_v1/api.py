from fastapi import APIRouter

from markup.api.api_v1.endpoints import messages

api_router = APIRouter()
api_router.include_router(messages.router, prefix="/v1", tags=["Message markup"])
