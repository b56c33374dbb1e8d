from __future__ import annotations

import logging
import logging.config

from litestar import Litestar, get

from policykit import DecisionLogger, Policy, use_permission
from policykit.adapters.litestar import require_permission

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"default": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"}},
    "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "default"}},
    "root": {"level": "INFO", "handlers": ["console"]},
}
logging.config.dictConfig(LOGGING)

DOCS = {1: {"owner": "u1", "public": False}, 2: {"owner": "u2", "public": True}}

DocPolicy = Policy(
    {
        "before": lambda user, doc: user["role"] == "admin",
        "read": lambda user, doc: doc["public"] or user["id"] == doc["owner"],
        "update": lambda user, doc: user["id"] == doc["owner"],
    },
    name="doc",
)
audit = DecisionLogger(as_json=True)


def current_user(connection) -> dict:
    return {"id": connection.headers.get("x-user", "anonymous"), "role": connection.headers.get("x-role", "user")}


def build_env(connection):
    perms = use_permission(DocPolicy, for_user=current_user(connection), logger_sink=audit)
    return perms, DOCS[connection.path_params["doc_id"]]


@get("/docs/{doc_id:int}", guards=[require_permission("read", build_env)], sync_to_thread=False)
def get_doc(doc_id: int) -> dict:
    return {"doc": doc_id}


@get("/docs/{doc_id:int}/edit", guards=[require_permission(["read", "update"], build_env)], sync_to_thread=False)
def edit_doc(doc_id: int) -> dict:
    return {"editing": doc_id}


@get("/health", sync_to_thread=False)
def health() -> dict:
    return {"ok": True}


app = Litestar(route_handlers=[get_doc, edit_doc, health])

# Run: uvicorn examples.litestar_demo.app:app --reload
