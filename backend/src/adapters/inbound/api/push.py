"""
Push subscription API routes.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from backend.src.adapters.inbound.api.dependencies import get_progress_service
from backend.src.application.progress_service import ProgressService

router = APIRouter()


class SubscriptionKeys(BaseModel):
    p256dh: str = ""
    auth: str = ""


class SubscriptionBody(BaseModel):
    endpoint: str = ""
    keys: SubscriptionKeys = Field(default_factory=SubscriptionKeys)


class SubscribeRequest(BaseModel):
    user_id: str = Field(default="", alias="userId")
    subscription: SubscriptionBody = Field(default_factory=SubscriptionBody)

    model_config = {"populate_by_name": True}


class PushTestRequest(BaseModel):
    user_id: str = Field(default="", alias="userId")
    title: str = ""
    body: str = ""

    model_config = {"populate_by_name": True}


@router.post("/subscribe", status_code=204, response_class=Response)
async def subscribe(
    body: SubscribeRequest,
    service: ProgressService = Depends(get_progress_service),
):
    await service.subscribe(
        user_id=body.user_id,
        endpoint=body.subscription.endpoint,
        p256dh_key=body.subscription.keys.p256dh,
        auth_key=body.subscription.keys.auth,
    )
    return Response(status_code=204)


@router.post("/test", status_code=204, response_class=Response)
async def send_test_push(
    body: PushTestRequest,
    service: ProgressService = Depends(get_progress_service),
):
    await service.send_test_notification(body.user_id, body.title, body.body)
    return Response(status_code=204)
