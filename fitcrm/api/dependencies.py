"""
FastAPI dependency injection.

Dependencies hand route handlers the settings, the client repository and
the exercise suggestion source. The long-lived objects are built once in
the application lifespan and kept on app.state, so there is no
module-level singleton and tests can build an app around their own
store.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from ..config.settings import Settings
from ..core.exercises.models import SuggestionSource
from ..core.views.controller import ClientViewController
from ..infrastructure.storage.repository import ClientRepository

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_client_repository(request: Request) -> ClientRepository:
    """The process-wide client repository created at startup."""
    return request.app.state.repository


def get_suggestion_source(request: Request) -> SuggestionSource:
    """The exercise suggestion client created at startup."""
    return request.app.state.suggestion_source


def get_view_controller(
    repository: Annotated[ClientRepository, Depends(get_client_repository)],
):
    """
    Provide a view controller for one request.

    Each HTTP request is its own navigation, so the controller lives only
    as long as the request and unsubscribes from the repository after.
    """
    controller = ClientViewController(repository)
    try:
        yield controller
    finally:
        controller.close()


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

SettingsDep = Annotated[Settings, Depends(get_app_settings)]
ClientRepositoryDep = Annotated[ClientRepository, Depends(get_client_repository)]
SuggestionSourceDep = Annotated[SuggestionSource, Depends(get_suggestion_source)]
ViewControllerDep = Annotated[ClientViewController, Depends(get_view_controller)]
