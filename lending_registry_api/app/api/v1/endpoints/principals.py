"""
Principal endpoints for API v1.

Provide registration, login and lookup of the calling principal.
Login returns a bearer token; the API keeps no session, so every
later request presents that token and is resolved on its own.
"""

import logging

from fastapi import APIRouter, Depends, status

from lending_registry_api.app.core.security import create_access_token, get_current_principal
from lending_registry_api.app.core.store import LendingStore, get_request_store
from lending_registry_api.app.schemas.principal import (
    LoginRequest,
    LoginResponse,
    PrincipalCreate,
    PrincipalRead,
)
from lending_registry_api.app.services.records import Principal

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=PrincipalRead, status_code=status.HTTP_201_CREATED)
def register_principal(
    payload: PrincipalCreate,
    store: LendingStore = Depends(get_request_store),
) -> PrincipalRead:
    """Register a new principal.

    The role defaults to ``STUDENT``.  A duplicate identifier yields
    409 with code ``DUPLICATE_IDENTIFIER``.
    """
    principal = store.register_principal(
        Principal(principal_id=payload.principal_id, name=payload.name, role=payload.role),
        payload.secret,
    )
    return PrincipalRead.model_validate(principal)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    store: LendingStore = Depends(get_request_store),
) -> LoginResponse:
    """Exchange credentials for an access token (401 on mismatch)."""
    principal = store.authenticate(payload.principal_id, payload.secret)
    token = create_access_token({"sub": principal.principal_id})
    logger.info("Issued access token for %s", principal.principal_id)
    return LoginResponse(access_token=token, principal=PrincipalRead.model_validate(principal))


@router.get("/me", response_model=PrincipalRead)
def read_current_principal(
    current_principal: Principal = Depends(get_current_principal),
) -> PrincipalRead:
    return PrincipalRead.model_validate(current_principal)
