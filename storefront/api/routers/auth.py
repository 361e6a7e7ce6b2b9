# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends

from storefront.api.errors import http_errors
from storefront.api.state import AppState, get_state
from storefront.domain.schemas import LoginIn, RegisterIn, SessionOut

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=SessionOut, status_code=201)
def register(payload: RegisterIn, state: AppState = Depends(get_state)):
    with http_errors():
        return state.auth.register(payload.email, payload.password, payload.name)


@router.post("/login", response_model=SessionOut)
def login(payload: LoginIn, state: AppState = Depends(get_state)):
    with http_errors():
        return state.auth.login(payload.email, payload.password)


@router.post("/logout", response_model=SessionOut)
def logout(state: AppState = Depends(get_state)):
    state.auth.logout()
    return state.auth.current_user()


@router.get("/me", response_model=SessionOut)
def me(state: AppState = Depends(get_state)):
    return state.auth.current_user()
