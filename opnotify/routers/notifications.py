"""Intake route that queues notifications for delivery."""

import logging

from fastapi import APIRouter, HTTPException, Request

from opnotify.dispatcher import Dispatcher
from opnotify.errors import DispatcherClosed
from opnotify.models import NotificationRequest
from opnotify.response import single_response
from opnotify.schemas.notification import NotificationAccepted, NotificationCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


@router.post("", status_code=202, summary="Queue a status notification")
async def create_notification(body: NotificationCreate, request: Request):
    dispatcher = get_dispatcher(request)

    notification = NotificationRequest.build(
        resource=body.resource.to_ref(),
        notification=body.notification,
        information=body.information.to_information(body.resource),
    )

    try:
        await dispatcher.enqueue(notification)
    except DispatcherClosed:
        raise HTTPException(status_code=503, detail="Notification dispatcher is shutting down")

    backend = notification.backend.variant.value if notification.backend else None
    logger.debug(
        "Queued notification for %s/%s via %s",
        body.resource.namespace,
        body.resource.name,
        backend or "nothing",
    )
    accepted = NotificationAccepted(backend=backend, pending=dispatcher.pending())
    return single_response(accepted.model_dump())
