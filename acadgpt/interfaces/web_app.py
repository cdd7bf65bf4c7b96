"""
Web interface - FastAPI backend for the AcadGPT frontend.

Run with:
    uvicorn --factory acadgpt.interfaces.web_app:create_app --host 0.0.0.0 --port 5000

Endpoints:
    POST /upload              upload a PDF/image as the document context
    POST /ask                 ask a question
    GET  /download/{name}     download a library file
    GET  /files               list library files
    GET  /books               textbook load status
    POST /refresh-files       rescan the library folder
    GET  /health              quick status check
"""

import logging

from fastapi import FastAPI, File, Header, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from acadgpt import __version__
from acadgpt.config import (
    SERVER_ERROR_MESSAGE,
    UPLOAD_ERROR_MESSAGE,
    UPLOAD_OK_MESSAGE,
)
from acadgpt.errors import PathTraversalError
from acadgpt.log import configure_logging
from acadgpt.rag.assistant import AcademicAssistant, build_assistant

logger = logging.getLogger(__name__)


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1)
    subject: str | None = None


def create_app(assistant: AcademicAssistant | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        assistant: Pipeline to serve; built from config when not given
    """
    if assistant is None:
        configure_logging()
        assistant = build_assistant()

    app = FastAPI(
        title="AcadGPT",
        version=__version__,
        description="Academic assistant over a shared library, marksheets and textbooks.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.assistant = assistant

    @app.post("/upload")
    async def upload(
        book: UploadFile = File(...),
        x_session_id: str | None = Header(default=None),
    ):
        try:
            data = await book.read()
            fmt = assistant.ingest_document(data, book.filename or "", x_session_id)
        except Exception:
            logger.exception("Upload error")
            return JSONResponse(status_code=500, content={"message": UPLOAD_ERROR_MESSAGE})
        return {"message": UPLOAD_OK_MESSAGE, "format": fmt.value}

    @app.post("/ask")
    def ask(body: AskRequest, x_session_id: str | None = Header(default=None)):
        try:
            answer = assistant.answer(body.question, body.subject, x_session_id)
        except Exception:
            logger.exception("Server error")
            return JSONResponse(status_code=500, content={"answer": SERVER_ERROR_MESSAGE})
        return answer.to_payload()

    @app.get("/download/{filename:path}")
    def download(filename: str):
        try:
            path = assistant.library.download_path(filename)
        except (PathTraversalError, ValueError):
            logger.warning("Rejected download outside library: %r", filename)
            return PlainTextResponse("Access denied", status_code=403)

        if path is None:
            available = ", ".join(assistant.library.names()) or "none"
            return PlainTextResponse(
                f"File not found. Available files: {available}", status_code=404
            )

        return FileResponse(path, media_type="application/octet-stream", filename=path.name)

    @app.get("/files")
    def list_files():
        files = assistant.library.scan()
        return {
            "files": [entry.to_dict() for entry in files],
            "count": len(files),
            "downloadBaseUrl": f"{assistant.public_base_url}/download/",
        }

    @app.get("/books")
    def books():
        return assistant.textbooks.status()

    @app.post("/refresh-files")
    def refresh_files():
        files = assistant.library.scan()
        return {
            "message": "File list refreshed",
            "files": [entry.name for entry in files],
            "count": len(files),
        }

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "files_count": len(assistant.library.files),
            "loaded_subjects": assistant.textbooks.loaded_subjects(),
        }

    return app
