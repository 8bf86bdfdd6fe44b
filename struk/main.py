"""Main FastAPI application for the receipt reader."""

import base64
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from loguru import logger
from pydantic import BaseModel

from . import __version__
from .config import settings
from .models.receipt import ReceiptMode, ReceiptRecord
from .printing import build_intent_url, build_receipt_commands
from .services.receipt_service import ReceiptService, apply_admin_fee, is_recognized


# Configure logging
logger.remove()
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    level=settings.log_level
)

NOT_RECOGNIZED_MESSAGES = {
    ReceiptMode.TOKEN: "Token tidak ditemukan. Coba lagi.",
    ReceiptMode.PAYMENT: "Bukan struk pembayaran yang dikenali. Coba lagi.",
}


def build_ai_parser():
    """Gemini parser when configured; None keeps extraction rule-based."""
    if not settings.ai_available:
        logger.info("AI parsing disabled (no GCP project or AI_ENABLED=false)")
        return None

    from .llm.gemini_client import GeminiParser

    try:
        return GeminiParser()
    except Exception as e:
        logger.warning(f"Gemini unavailable, continuing rule-based only: {e}")
        return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    logger.info("🚀 Starting Struk receipt reader")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")

    app.state.receipt_service = ReceiptService(ai_parser=build_ai_parser())

    logger.info("✅ Receipt service initialized successfully")

    yield

    logger.info("Receipt reader shut down complete")


# Create FastAPI app
app = FastAPI(
    title="Struk Receipt Reader",
    description="PLN token and bill payment receipt extraction",
    version=__version__,
    lifespan=lifespan
)


class PrintRequest(BaseModel):
    """Receipt to print and an optional store header."""

    record: ReceiptRecord
    store_name: Optional[str] = None


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "Struk Receipt Reader",
        "status": "running",
        "version": __version__
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.environment
    }


@app.post("/extract")
async def extract_receipt(
    request: Request,
    file: UploadFile = File(...),
    mode: ReceiptMode = Form(ReceiptMode.TOKEN),
    admin_fee: Optional[int] = Form(None),
):
    """
    Extract a receipt record from an uploaded photo or PDF.

    The outlet admin fee (form value, else the configured default) replaces
    the printed one and the total is recomputed.
    """
    service: ReceiptService = request.app.state.receipt_service
    content = await file.read()
    filename = (file.filename or "").lower()
    is_pdf = file.content_type == "application/pdf" or filename.endswith(".pdf")

    logger.info(f"Processing {'PDF' if is_pdf else 'image'} {filename!r} in {mode.value} mode")

    try:
        if is_pdf:
            record = await service.process_pdf(content, mode)
        else:
            record = await service.process_image(content, mode)
    except Exception as e:
        logger.error(f"Error processing receipt: {e}")
        raise HTTPException(status_code=500, detail=f"Gagal memproses file: {e}")

    if not is_recognized(record):
        raise HTTPException(status_code=422, detail=NOT_RECOGNIZED_MESSAGES[mode])

    fee = settings.default_admin_fee if admin_fee is None else admin_fee
    return apply_admin_fee(record, fee).to_dict()


@app.post("/print")
async def print_receipt(payload: PrintRequest):
    """Render a record as ESC/POS bytes and a RawBT intent URL."""
    commands = build_receipt_commands(payload.record, payload.store_name)
    return {
        "commands_base64": base64.b64encode(commands).decode("ascii"),
        "intent_url": build_intent_url(commands),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "struk.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=not settings.is_production
    )
