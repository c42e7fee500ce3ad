from fastapi import APIRouter

from bulkimport.api.v1 import import_routes

api_router = APIRouter()

api_router.include_router(import_routes.router, prefix="/import", tags=["import"])
