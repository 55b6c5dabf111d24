"""Read-only HTTP inspection API for the ofono account storage.

Provides:
  GET    /health  liveness and account count
  GET    /provider  provider identity metadata
  GET    /accounts  all account names
  GET    /accounts/{account_name}?key=  pushed settings, identifier, restrictions
  POST   /accounts  create (always rejected, 400)
  PUT    /accounts/{account_name}  set (always rejected, 403)
  DELETE /accounts/{account_name}  delete (always rejected, 403)

Account names contain slashes ("ofono/ofono/account0"), so the name is a
path parameter.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ofono_accounts.account_manager import RecordingAccountManager
from ofono_accounts.base_storage import BaseAccountStorage
from ofono_accounts.exceptions import AccountCreationNotSupportedError

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI, storage: BaseAccountStorage) -> None:
    """Register inspection routes on a FastAPI app."""

    @app.get("/health")
    async def health():
        return {"status": "ok", "accounts": len(storage.list())}

    @app.get("/provider")
    async def provider():
        return storage.metadata

    @app.get("/accounts")
    async def list_accounts():
        return {"accounts": storage.list()}

    @app.post("/accounts")
    async def create_account(request: Request):
        try:
            body = await request.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        manager = RecordingAccountManager()
        try:
            name = storage.create(
                manager,
                body.get("manager", ""),
                body.get("protocol", ""),
                body.get("params", {}),
            )
        except AccountCreationNotSupportedError as e:
            logger.info("Rejected account creation: %s", e)
            return JSONResponse(e.to_dict(), status_code=400)
        return {"account_name": name}

    @app.get("/accounts/{account_name:path}")
    async def get_account(account_name: str, key: Optional[str] = None):
        manager = RecordingAccountManager()
        if not storage.get(manager, account_name, key):
            return JSONResponse(
                {"error": "NotFound", "message": f"Unknown account: {account_name}"},
                status_code=404,
            )
        return {
            "account_name": account_name,
            "identifier": storage.get_identifier(account_name),
            "restrictions": storage.get_restrictions(account_name),
            "params": manager.values_for(account_name),
        }

    @app.put("/accounts/{account_name:path}")
    async def set_param(account_name: str, key: str, value: Optional[str] = None):
        accepted = storage.set(RecordingAccountManager(), account_name, key, value)
        return JSONResponse({"accepted": accepted}, status_code=200 if accepted else 403)

    @app.delete("/accounts/{account_name:path}")
    async def delete_account(account_name: str, key: Optional[str] = None):
        accepted = storage.delete(RecordingAccountManager(), account_name, key)
        return JSONResponse({"accepted": accepted}, status_code=200 if accepted else 403)


def create_app(storage: BaseAccountStorage) -> FastAPI:
    """Build a FastAPI app serving one storage provider."""
    app = FastAPI(title="ofono accounts", version="0.1.0")
    register_routes(app, storage)
    return app
