import base64
import json
from typing import Optional
import handlers
from config import Settings, load_settings
from database import MessageStore, build_store
from errors import ErrorCode, StoreError
from logger import configure_logging, log_error

# Built on first invocation, reused while the container stays warm
_settings: Optional[Settings] = None
_store: Optional[MessageStore] = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
        configure_logging(_settings.log_level)
    return _settings

def get_store() -> MessageStore:
    global _store
    if _store is None:
        _store = build_store(get_settings())
    return _store

def set_store(store: Optional[MessageStore], settings: Optional[Settings] = None):
    global _store, _settings
    _store = store
    if settings is not None:
        _settings = settings

# Echo the caller's origin only when it is allowed
def cors_headers(event: dict) -> dict:
    allowed = get_settings().cors_origins
    request_headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    origin = request_headers.get("origin")
    if "*" in allowed:
        allow_origin = "*"
    elif origin in allowed:
        allow_origin = origin
    else:
        allow_origin = allowed[0] if allowed else ""

    return {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }

def to_proxy_response(event: dict, result: handlers.HandlerResult) -> dict:
    return {
        "statusCode": result.status_code,
        "headers": cors_headers(event),
        "body": json.dumps(result.body),
    }

def _decode_body(event: dict):
    raw = event.get("body")
    if not raw:
        return None
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    return json.loads(raw)

# Cold-start store failures still answer with a proxy response
def _resolve_store(context: str):
    try:
        return get_store(), None
    except StoreError as e:
        log_error(context, e)
        return None, handlers.error_result(500, "Storage unavailable", ErrorCode.DATABASE_ERROR)
    except Exception as e:
        log_error(context, e)
        return None, handlers.internal_error()

# POST /api/messages
def create_message(event: dict, context=None) -> dict:
    try:
        body = _decode_body(event)
    except ValueError as e:
        log_error("Error creating message", e)
        return to_proxy_response(event, handlers.internal_error())

    store, failure = _resolve_store("Error opening message store")
    if failure is not None:
        return to_proxy_response(event, failure)
    return to_proxy_response(event, handlers.create_message(store, body))

# GET /api/messages
def get_messages(event: dict, context=None) -> dict:
    store, failure = _resolve_store("Error opening message store")
    if failure is not None:
        return to_proxy_response(event, failure)
    return to_proxy_response(event, handlers.list_messages(store))

def handler(event: dict, context=None) -> dict:
    method = (event.get("httpMethod") or "").upper()
    if method == "OPTIONS":
        return {"statusCode": 204, "headers": cors_headers(event), "body": ""}
    if method == "POST":
        return create_message(event, context)
    if method == "GET":
        return get_messages(event, context)

    return to_proxy_response(
        event, handlers.error_result(405, "Method not allowed", ErrorCode.INTERNAL_ERROR)
    )
