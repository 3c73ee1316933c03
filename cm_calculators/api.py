"""
CV converter HTTP API (FastAPI).
POST /api/convert-cv takes a multipart upload and returns signed DOCX/PDF links.
"""

import traceback
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from cm_calculators.config import ConverterSettings
from cm_calculators.exceptions import CVConverterError, ConfigurationError, InvalidRequestError
from cm_calculators.services.cv_converter import CVConverterService
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

ServiceFactory = Callable[[ConverterSettings], CVConverterService]


def _error_response(error: BaseException, status_code: int, settings: ConverterSettings) -> JSONResponse:
    """{error, type, details}; tracebacks and causes only in development."""
    body = {
        "error": getattr(error, "message", None) or str(error) or "An unexpected error occurred",
        "type": getattr(error, "error_type", type(error).__name__),
        "details": getattr(error, "details", None),
    }
    if settings.is_development and status_code >= 500:
        cause = getattr(error, "cause", None)
        body["details"] = {
            "stack": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
            "cause": repr(cause) if cause else None,
        }
    return JSONResponse(status_code=status_code, content=body)


def create_app(
    settings: Optional[ConverterSettings] = None,
    service_factory: ServiceFactory = CVConverterService.from_settings,
) -> FastAPI:
    """Build the API; settings and service wiring are injectable for tests."""
    app = FastAPI(title="CloudMarc CV Converter", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.state.settings = settings or ConverterSettings.from_env()
    app.state.service = None

    def get_service() -> CVConverterService:
        if app.state.service is None:
            app.state.service = service_factory(app.state.settings)
        return app.state.service

    @app.get("/api/health")
    async def health():
        missing = app.state.settings.missing_variables()
        return {"status": "ok" if not missing else "misconfigured", "missing": missing}

    @app.post("/api/convert-cv")
    async def convert_cv(request: Request):
        settings: ConverterSettings = app.state.settings
        try:
            missing = settings.missing_variables()
            if missing:
                raise ConfigurationError("Missing required environment variables: " + ", ".join(missing))

            content_type = request.headers.get("content-type", "")
            if "multipart/form-data" not in content_type:
                logger.error("Invalid content type: %s", content_type)
                raise InvalidRequestError(
                    "Invalid content type. Expected multipart/form-data.", details=content_type
                )

            form = await request.form()
            upload = form.get("file")
            file_bytes = await upload.read() if isinstance(upload, UploadFile) else b""
            if not file_bytes:
                logger.error("No file received in request")
                raise InvalidRequestError(
                    "No file received in request",
                    details="Please ensure a file is included in the form data",
                )
            position_title = str(form.get("positionTitle") or "")
            account_manager_id = str(form.get("accountManager") or "")
            logger.info("Received %s (%s bytes)", upload.filename, len(file_bytes))

            service = get_service()
            result = await run_in_threadpool(
                service.convert, file_bytes, upload.filename or "cv.pdf", position_title, account_manager_id
            )
            return result.model_dump(by_alias=True)
        except CVConverterError as e:
            if e.status_code >= 500:
                logger.exception("Error processing CV: %s", e.message)
            return _error_response(e, e.status_code, settings)
        except Exception as e:
            logger.exception("Unexpected error processing CV")
            return _error_response(e, 500, settings)

    return app
