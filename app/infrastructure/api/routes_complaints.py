"""Complaint submission endpoint."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from app.application.use_cases.process_complaint import ProcessComplaintUseCase
from app.domain.exceptions import EmptyComplaint
from app.domain.policies.intake import normalize_complaint
from app.infrastructure.api.dependencies import get_process_complaint_uc, get_submitter_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["complaints"])

EMPTY_COMPLAINT_MESSAGE = "Please enter a complaint!"


@router.post("/submit-complaint")
async def submit_complaint(
    complaint: str = Form(default=""),
    photo: UploadFile | None = File(default=None),
    lat: str | None = Form(default=None),
    lng: str | None = Form(default=None),
    location_city: str | None = Form(default=None),
    state: str | None = Form(default=None),
    submitter_id: str | None = Depends(get_submitter_id),
    uc: ProcessComplaintUseCase = Depends(get_process_complaint_uc),
):
    """Triage one complaint and store it as a numbered ticket."""
    photo_bytes = await photo.read() if photo is not None else None

    try:
        normalized = normalize_complaint(
            complaint,
            photo=photo_bytes,
            photo_mime_type=photo.content_type if photo is not None else None,
            photo_filename=photo.filename if photo is not None else None,
            lat=lat,
            lng=lng,
            city=location_city,
            state=state,
            submitter_id=submitter_id,
        )
    except EmptyComplaint:
        raise HTTPException(status_code=400, detail=EMPTY_COMPLAINT_MESSAGE)

    result = await uc.execute(normalized)
    body = asdict(result)
    error = body.pop("error")
    if error is not None:
        body["error"] = error
        return JSONResponse(status_code=503, content=body)
    return body
