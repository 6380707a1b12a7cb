"""
Client API endpoints.

Each endpoint is a thin renderer over the view controller: it builds the
controller's view model and converts it to JSON. Validation, search and
persistence rules all live in core and the repository.

Screens:
- list: GET /api/v1/clients?q=
- form: POST/PUT for submit, GET /{id}/form to prefill an edit
- detail: GET /{id}/view, including exercise suggestions
"""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from ...core.clients.models import ClientCandidate, ClientRecord
from ...core.views.models import DetailView, FormView, ListView
from ..dependencies import (
    ClientRepositoryDep,
    SettingsDep,
    SuggestionSourceDep,
    ViewControllerDep,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class ClientPayload(BaseModel):
    """
    Client fields submitted from the form.

    Required fields default to empty so that missing values reach the
    validator and come back as readable reasons, not schema errors.
    """
    full_name: str = Field("", description="Client's full name", max_length=200)
    email: str = Field("", description="Contact email", max_length=320)
    start_date: str = Field("", description="Start date (YYYY-MM-DD)", max_length=40)
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = Field(None, max_length=40)
    phone: Optional[str] = Field(None, max_length=40)
    fitness_goal: str = Field("", description="Free-text training goal", max_length=2000)

    @field_validator("age", mode="before")
    @classmethod
    def blank_age_is_absent(cls, value):
        # HTML forms submit an untouched number input as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_candidate(self) -> ClientCandidate:
        return ClientCandidate(**self.model_dump())


class ClientResponse(BaseModel):
    """A stored client."""
    id: str
    full_name: str
    email: str
    start_date: str
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    fitness_goal: str = ""

    @classmethod
    def from_record(cls, record: ClientRecord) -> "ClientResponse":
        return cls(id=record.id, **asdict(record.as_candidate()))


class ClientRowResponse(BaseModel):
    id: str
    full_name: str
    email: str
    phone: str
    fitness_goal: str
    start_date: str


class ClientListResponse(BaseModel):
    """The list screen."""
    query: str = Field(description="Search text the rows were filtered by")
    is_empty: bool = Field(description="True when no clients are stored at all")
    notice: Optional[str] = Field(None, description="Confirmation from the last action")
    clients: list[ClientRowResponse]

    @classmethod
    def from_view(cls, view: ListView) -> "ClientListResponse":
        return cls(
            query=view.query,
            is_empty=view.is_empty,
            notice=view.notice,
            clients=[ClientRowResponse(**asdict(row)) for row in view.rows],
        )


class ClientSavedResponse(BaseModel):
    """Result of a successful create or update."""
    client: ClientResponse
    notice: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    detail: str
    reasons: list[str]


class FormResponse(BaseModel):
    """The edit form, prefilled."""
    mode: str
    heading: str
    button_label: str
    client_id: Optional[str] = None
    values: ClientPayload

    @classmethod
    def from_view(cls, view: FormView) -> "FormResponse":
        return cls(
            mode=view.mode.value,
            heading=view.heading,
            button_label=view.button_label,
            client_id=view.client_id,
            values=ClientPayload(**asdict(view.values)),
        )


class SuggestionResponse(BaseModel):
    name: str
    description: str


class SuggestionPanelResponse(BaseModel):
    status: str
    message: Optional[str] = None
    items: list[SuggestionResponse] = []


class ClientDetailResponse(BaseModel):
    """The detail screen, with placeholders already applied."""
    id: str
    full_name: str
    email: str
    phone: str
    fitness_goal: str
    start_date: str
    age: str
    gender: str
    suggestions: SuggestionPanelResponse

    @classmethod
    def from_view(cls, view: DetailView) -> "ClientDetailResponse":
        panel = view.suggestions
        return cls(
            id=view.client_id,
            full_name=view.full_name,
            email=view.email,
            phone=view.phone,
            fitness_goal=view.fitness_goal,
            start_date=view.start_date,
            age=view.age,
            gender=view.gender,
            suggestions=SuggestionPanelResponse(
                status=panel.status.value,
                message=panel.message,
                items=[SuggestionResponse(name=i.name, description=i.description) for i in panel.items],
            ),
        )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=ClientListResponse,
    summary="List clients",
    description="All clients in insertion order, optionally filtered by name",
)
async def list_clients(
    controller: ViewControllerDep,
    q: str = Query("", description="Case-insensitive name search", max_length=200),
) -> ClientListResponse:
    return ClientListResponse.from_view(controller.show_list(q))


@router.post(
    "",
    response_model=ClientSavedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a client",
    responses={422: {"model": ValidationErrorResponse}},
)
async def create_client(
    payload: ClientPayload,
    controller: ViewControllerDep,
):
    result = controller.submit_form(payload.to_candidate())
    if not result.saved:
        return _validation_failed(result.form, result.reasons)

    return ClientSavedResponse(
        client=ClientResponse.from_record(result.record),
        notice=result.list_view.notice if result.list_view else None,
    )


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Get a client",
)
async def get_client(
    client_id: str,
    repository: ClientRepositoryDep,
) -> ClientResponse:
    record = repository.find_by_id(client_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found!",
        )
    return ClientResponse.from_record(record)


@router.get(
    "/{client_id}/form",
    response_model=FormResponse,
    summary="Edit form for a client",
)
async def get_edit_form(
    client_id: str,
    controller: ViewControllerDep,
) -> FormResponse:
    return FormResponse.from_view(controller.show_form(client_id))


@router.put(
    "/{client_id}",
    response_model=ClientSavedResponse,
    summary="Update a client",
    responses={422: {"model": ValidationErrorResponse}},
)
async def update_client(
    client_id: str,
    payload: ClientPayload,
    controller: ViewControllerDep,
):
    result = controller.submit_form(payload.to_candidate(), client_id=client_id)
    if not result.saved:
        return _validation_failed(result.form, result.reasons)

    return ClientSavedResponse(
        client=ClientResponse.from_record(result.record),
        notice=result.list_view.notice if result.list_view else None,
    )


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a client",
    description="Deleting a client that does not exist is not an error.",
)
async def delete_client(
    client_id: str,
    controller: ViewControllerDep,
) -> Response:
    controller.delete_client(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{client_id}/view",
    response_model=ClientDetailResponse,
    summary="Client detail with exercise suggestions",
    description=(
        "Client fields plus suggested exercises. If the exercise catalog "
        "cannot be reached the suggestions carry a placeholder message "
        "instead of failing the request."
    ),
)
async def view_client(
    client_id: str,
    controller: ViewControllerDep,
    source: SuggestionSourceDep,
    settings: SettingsDep,
) -> ClientDetailResponse:
    view = controller.open_detail(client_id)
    resolved = await controller.load_suggestions(view, source, settings.exercise_limit)
    return ClientDetailResponse.from_view(resolved or view)


def _validation_failed(form: Optional[FormView], reasons: tuple[str, ...]) -> JSONResponse:
    body = ValidationErrorResponse(
        detail=form.message if form else "Invalid client",
        reasons=list(reasons),
    )
    return JSONResponse(
        status_code=422,
        content=body.model_dump(),
    )
