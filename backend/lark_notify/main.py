import logging

from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware

from lark_notify.api.errors import install_api_error_handlers
from lark_notify.api.v1.router import api_router
from lark_notify.core.config import settings


def create_app() -> FastAPI:
    logging.getLogger("lark_notify").setLevel(settings.log_level)

    application = FastAPI(title="Lark Notify API", version="0.1.0")
    install_api_error_handlers(application)

    application.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(api_router, prefix="/api/v1")

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run("lark_notify.main:app", host="0.0.0.0", port=8000, reload=True)
