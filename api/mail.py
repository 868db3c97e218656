"""POST /api/mail — send a free-form email through the gateway."""

import base64
import binascii

from fastapi import APIRouter, Request
from pydantic import BaseModel, EmailStr, Field

from api.base import success_response
from clients.email_client import EmailAttachment


class AttachmentIn(BaseModel):
    content_base64: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1, max_length=255)
    content_type: str = "application/octet-stream"

    def decode(self) -> EmailAttachment:
        try:
            content = base64.b64decode(self.content_base64, validate=True)
        except binascii.Error:
            raise ValueError("Attachment content is not valid base64")
        return EmailAttachment(content=content, filename=self.filename, content_type=self.content_type)


class MailRequest(BaseModel):
    to: list[EmailStr] = Field(..., min_length=1)
    subject: str = Field(..., min_length=1, max_length=998)
    text: str = Field(..., min_length=1)
    html: str | None = None
    attachment: AttachmentIn | None = None


def create_mail_router(services: dict) -> APIRouter:
    router = APIRouter()

    mail_svc = services["mail"]

    @router.post("/mail")
    def send_mail(request: Request, body: MailRequest):
        attachment = body.attachment.decode() if body.attachment else None
        message_id = mail_svc.send(
            [str(address) for address in body.to],
            body.subject,
            body.text,
            html=body.html,
            attachment=attachment,
        )
        return success_response(
            {"message_id": message_id}, request.state.request_id
        ).model_dump(mode="json")

    return router
