from __future__ import annotations

from fastapi import APIRouter, Depends, FastAPI, Form

from .validator import CredentialValidator, load_validator

router = APIRouter()


def current_validator() -> CredentialValidator | None:
    return load_validator()


@router.post("/auth/validate")
def validate_credentials(
    username: str = Form(""),
    password: str = Form(""),
    validator: CredentialValidator | None = Depends(current_validator),
) -> dict:
    # Same response shape for every failure, whatever the cause.
    ok = validator is not None and validator.validate(username, password)
    return {"authenticated": ok}


@router.get("/healthz")
def healthz(validator: CredentialValidator | None = Depends(current_validator)) -> dict:
    reachable = validator is not None and validator.probe()
    return {"status": "ok", "directory_reachable": reachable}


def create_app() -> FastAPI:
    app = FastAPI(title="AD Bind Auth")
    app.include_router(router)
    return app
