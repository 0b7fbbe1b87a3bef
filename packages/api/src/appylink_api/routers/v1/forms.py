"""Public form endpoints: listing submissions and contact messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from appylink_api.dependencies import get_client_state
from appylink_api.responses import wrap_response
from appylink_api.schemas import ContactForm, SubmissionForm
from appylink_api.services import form_service
from appylink_api.services.form_service import FormResult
from appylink_api.storage import ClientState

router = APIRouter(tags=["forms"])


def form_response(result: FormResult, response: Response):
    # A tripped honeypot gets no success or error state at all.
    if result.outcome == "dropped":
        return Response(status_code=204)
    if result.outcome == "queued":
        response.status_code = 202
    return wrap_response({"status": result.outcome}, source=result.source)


@router.post("/submissions", status_code=201)
async def submit_listing(
    body: SubmissionForm,
    response: Response,
    state: ClientState = Depends(get_client_state),
):
    return form_response(form_service.submit_listing(body, state), response)


@router.post("/contact", status_code=201)
async def send_contact_message(
    body: ContactForm,
    response: Response,
    state: ClientState = Depends(get_client_state),
):
    return form_response(form_service.send_contact_message(body, state), response)
