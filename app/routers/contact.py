# =============================================================================
# app/routers/contact.py - Contact Form Endpoint
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.dependencies import EmailServiceDep
from app.middleware.rate_limit import rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(rate_limit("contact"))])


@router.post("")
async def submit_contact(
    service: EmailServiceDep,
    payload: Any = Body(default=None),
):
    """
    Send a contact form message.

    Body: {"name": str, "email": str, "message": str}

    Returns 200 when sent, 400 when a field fails validation (the message
    names the first failing rule), 500 when the mail relay fails.
    """
    result = await service.send(payload if payload is not None else {})

    if result.success:
        status_code = 200
    elif result.failure == "validation":
        status_code = 400
    else:
        status_code = 500

    return JSONResponse(status_code=status_code, content=result.model_dump())
