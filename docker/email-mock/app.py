import base64
import logging
import sys
import uuid

from fastapi import FastAPI, Request, Response, status
from pydantic import BaseModel

logging.basicConfig(stream=sys.stdout, level=logging.INFO, format="%(asctime)sZ %(levelname)s %(message)s")

app = FastAPI(title="Email Provider Mock", version="1.0.0")

# operation id -> status; every accepted send succeeds on first poll
_operations: dict[str, str] = {}


class Attachment(BaseModel):
    name: str
    contentType: str
    contentInBase64: str


class SendEmail(BaseModel):
    senderAddress: str
    content: dict
    recipients: dict
    attachments: list[Attachment] = []


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/emails:send", status_code=status.HTTP_202_ACCEPTED)
async def send(payload: SendEmail, request: Request, response: Response) -> dict:
    op_id = str(uuid.uuid4())
    _operations[op_id] = "Succeeded"
    for a in payload.attachments:
        logging.info("EMAIL-MOCK attachment name=%s payload=%r", a.name, base64.b64decode(a.contentInBase64))
    logging.info(
        "EMAIL-MOCK send to=%s subject=%r request_id=%s",
        payload.recipients.get("to"),
        payload.content.get("subject"),
        request.headers.get("x-ms-client-request-id"),
    )
    response.headers["Operation-Location"] = f"{request.base_url}emails/operations/{op_id}?api-version=2023-03-31"
    response.headers["Retry-After"] = "1"
    return {"id": op_id, "status": "Running", "error": None}


@app.get("/emails/operations/{op_id}")
def operation(op_id: str, response: Response) -> dict:
    if op_id not in _operations:
        response.status_code = status.HTTP_404_NOT_FOUND
        return {"error": {"code": "NotFound", "message": "unknown operation"}}
    return {"id": op_id, "status": _operations[op_id], "error": None}
