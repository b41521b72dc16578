from typing import Optional
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from config import Settings, load_settings
from database import MessageStore, build_store
from errors import ErrorCode
from logger import configure_logging, log_error
from middleware import RequestLoggingMiddleware
from routes import message

def create_app(settings: Settings, store: Optional[MessageStore] = None) -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(title="Chirp Message Service")
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(message.router, prefix="/api/messages", tags=["Messages"])

    @app.get("/")
    async def root():
        return {"message": "Message Service Running"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        log_error(f"Server error in {request.method} {request.url.path}", exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR.value},
        )

    return app

# Factory for `uvicorn main:app_from_env --factory`
def app_from_env() -> FastAPI:
    return create_app(load_settings())

if __name__ == "__main__":
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
