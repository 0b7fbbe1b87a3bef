from fastapi import APIRouter

from appylink_api.responses import ApiError
from appylink_api.routers.v1 import (
    admin,
    auth,
    directory,
    forms,
    me,
)

v1_router = APIRouter(
    prefix="/v1",
    responses={
        422: {"model": ApiError, "description": "Validation failed"},
        502: {"model": ApiError, "description": "Supabase rejected the request"},
    },
)

v1_router.include_router(directory.router)
v1_router.include_router(forms.router)
v1_router.include_router(me.router)
v1_router.include_router(auth.router)
v1_router.include_router(admin.router)
