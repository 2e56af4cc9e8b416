"""Contact form API.

- POST /contact → anyone may submit (rate limited by middleware)
- GET /contact → admin inbox, newest first
- GET /contact/:id → one submission (admin)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from folio.auth.dependencies import get_admin
from folio.db.engine import get_db
from folio.errors import NotFound
from folio.schemas.common import Envelope
from folio.schemas.contact import ContactCreate, ContactRead
from folio.services.contact_service import ContactService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> ContactService:
    return ContactService(db)


@router.post("/contact", response_model=Envelope[ContactRead], status_code=201)
async def submit_contact(body: ContactCreate, svc: ContactService = Depends(_svc)):
    submission = await svc.create_submission(body.model_dump())
    return {
        "success": True,
        "message": "Contact form submitted successfully",
        "data": submission,
    }


@router.get(
    "/contact",
    response_model=Envelope[list[ContactRead]],
    dependencies=[Depends(get_admin)],
)
async def list_contacts(svc: ContactService = Depends(_svc)):
    return {"success": True, "data": await svc.list_submissions()}


@router.get(
    "/contact/{submission_id}",
    response_model=Envelope[ContactRead],
    dependencies=[Depends(get_admin)],
)
async def get_contact(submission_id: int, svc: ContactService = Depends(_svc)):
    submission = await svc.get_submission(submission_id)
    if submission is None:
        raise NotFound("Contact submission not found")
    return {"success": True, "data": submission}
