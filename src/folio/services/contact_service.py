"""Contact service — the public contact form's inbox.

Submissions are written by anyone and read by admins. They are never
edited or deleted.
"""

from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.db.models import ContactSubmission

logger = structlog.get_logger()


class ContactService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_submission(self, data: dict[str, Any]) -> ContactSubmission:
        submission = ContactSubmission(
            name=data["name"],
            email=data["email"],
            service=data["service"],
            message=data["message"],
        )
        self.db.add(submission)
        await self.db.commit()
        await self.db.refresh(submission)
        logger.info(
            "contact.submission_received",
            submission_id=submission.id,
            service=submission.service,
        )
        return submission

    async def get_submission(self, submission_id: int) -> ContactSubmission | None:
        return await self.db.get(ContactSubmission, submission_id)

    async def list_submissions(self) -> list[ContactSubmission]:
        result = await self.db.execute(
            select(ContactSubmission).order_by(
                ContactSubmission.created_at.desc(), ContactSubmission.id.desc()
            )
        )
        return list(result.scalars().all())
