"""
FastAPI backend: REST API over the contacts store.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, StrictInt
from pydantic.alias_generators import to_camel

from contactbook.application import (
    Conflict,
    ContactRepository,
    ContactService,
    InternalError,
    InvalidInput,
    NotFound,
    Success,
)
from contactbook.domain import Contact
from contactbook.infrastructure import (
    DatabaseConfig,
    SqlContactRepository,
    create_engine_from_config,
    ensure_schema,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

_STATUS_BY_OUTCOME = {
    InvalidInput: 400,
    NotFound: 404,
    Conflict: 409,
    InternalError: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = DatabaseConfig.from_env()
    engine = create_engine_from_config(config)
    try:
        ensure_schema(engine)
        app.state.repository = SqlContactRepository(engine)
        logger.info("Contacts store ready (%s).", engine.url.render_as_string(hide_password=True))
        yield
    finally:
        app.state.repository = None
        engine.dispose()


app = FastAPI(title="Contactbook API", lifespan=lifespan)


def get_repository(request: Request) -> ContactRepository:
    return request.app.state.repository


def get_service(repository: ContactRepository = Depends(get_repository)) -> ContactService:
    return ContactService(repository)


class ContactBody(BaseModel):
    """Wire shape of a Contact (camelCase). email/phone null stays null."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: StrictInt | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None

    def to_contact(self) -> Contact:
        return Contact(
            id=self.id,
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            email=self.email,
            phone=self.phone,
        )

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactBody":
        return cls(
            id=contact.id,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            phone=contact.phone,
        )


def _error_response(outcome) -> JSONResponse:
    status_code = _STATUS_BY_OUTCOME.get(type(outcome), 500)
    return JSONResponse(content={"message": outcome.message}, status_code=status_code)


def _dump(contact: Contact) -> dict:
    return ContactBody.from_contact(contact).model_dump(by_alias=True)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(content={"message": "The request payload is invalid."}, status_code=400)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


@app.get("/contacts")
def list_contacts(service: ContactService = Depends(get_service)):
    result = service.list()
    if not isinstance(result, Success):
        return _error_response(result)
    return [_dump(c) for c in result.payload]


@app.get("/contacts/{contact_id}", name="get_contact")
def get_contact(contact_id: int, service: ContactService = Depends(get_service)):
    result = service.get(contact_id)
    if not isinstance(result, Success):
        return _error_response(result)
    return _dump(result.payload)


@app.post("/contacts")
def create_contact(
    body: ContactBody,
    request: Request,
    service: ContactService = Depends(get_service),
):
    result = service.create(body.to_contact())
    if not isinstance(result, Success):
        return _error_response(result)
    created = result.payload
    return JSONResponse(
        content=_dump(created),
        status_code=201,
        headers={"Location": str(request.url_for("get_contact", contact_id=created.id))},
    )


@app.put("/contacts/{contact_id}")
def update_contact(
    contact_id: int,
    body: ContactBody,
    service: ContactService = Depends(get_service),
):
    result = service.update(contact_id, body.to_contact())
    if not isinstance(result, Success):
        return _error_response(result)
    return Response(status_code=204)


@app.delete("/contacts/{contact_id}")
def delete_contact(contact_id: int, service: ContactService = Depends(get_service)):
    result = service.delete(contact_id)
    if not isinstance(result, Success):
        return _error_response(result)
    return Response(status_code=204)
