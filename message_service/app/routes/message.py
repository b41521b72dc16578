import json
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
import handlers
from database import MessageStore
from logger import log_error

router = APIRouter()

# Store handle created at startup and kept on the app
def get_store(request: Request) -> MessageStore:
    return request.app.state.store

def to_response(result: handlers.HandlerResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)

# Post a new message
@router.post("")
async def create_message(request: Request, store: MessageStore = Depends(get_store)):
    raw = await request.body()
    body = None
    if raw.strip():
        try:
            body = json.loads(raw)
        except ValueError as e:
            log_error("Server error in POST /api/messages", e)
            return to_response(handlers.internal_error())

    result = await run_in_threadpool(handlers.create_message, store, body)
    return to_response(result)

# Get the whole feed, newest first
@router.get("")
async def get_messages(store: MessageStore = Depends(get_store)):
    result = await run_in_threadpool(handlers.list_messages, store)
    return to_response(result)
