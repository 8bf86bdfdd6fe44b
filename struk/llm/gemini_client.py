"""Google Gemini client for PLN token receipt parsing."""

import asyncio
import json
import os
import re
from typing import Optional, Dict
from io import BytesIO
import vertexai
from vertexai.generative_models import GenerativeModel, Part, GenerationConfig
from google.api_core import exceptions as google_exceptions
from PIL import Image, ImageOps
from pydantic import ValidationError
from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..models.receipt import TokenReceipt
from ..config import settings
from .prompts import (
    SYSTEM_PROMPT,
    TOKEN_EXTRACTION_PROMPT,
    TOKEN_RECEIPT_SCHEMA,
    VISION_EXTRACTION_PROMPT,
)

_CODE_FENCE = re.compile(r"```(?:json)?")

# Transient Vertex AI errors worth another attempt
_TRANSIENT_ERRORS = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.ResourceExhausted,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
)


class GeminiParser:
    """
    AI collaborator for token receipts.

    ``parse`` returns a :class:`TokenReceipt` or None; it never raises, so
    the orchestrator can fall back to rule-based extraction.
    """

    def __init__(self, model: Optional[GenerativeModel] = None, use_vision: Optional[bool] = None):
        """Initialize Gemini client with Vertex AI, or wrap a given model."""
        self.use_vision = settings.ai_vision if use_vision is None else use_vision

        if model is not None:
            self.model_name = settings.gemini_model
            self.model = model
            return

        try:
            # Set GOOGLE_APPLICATION_CREDENTIALS only for local development
            if (settings.google_application_credentials and
                    not settings.is_production):
                creds = settings.google_application_credentials
                os.environ['GOOGLE_APPLICATION_CREDENTIALS'] = creds

            vertexai.init(
                project=settings.gcp_project_id,
                location=settings.gcp_location,
            )

            self.model_name = settings.gemini_model
            self.model = GenerativeModel(
                self.model_name,
                system_instruction=[SYSTEM_PROMPT]
            )
            logger.info(
                f"Vertex AI initialized (project: {settings.gcp_project_id}, "
                f"location: {settings.gcp_location}, model: {self.model_name})"
            )
        except Exception as e:
            logger.error(f"Failed to initialize Vertex AI Gemini client: {e}")
            raise

    def preprocess_image(self, image_bytes: bytes) -> Image.Image:
        """Preprocess a receipt photo before sending it to Gemini."""
        try:
            img = Image.open(BytesIO(image_bytes))

            # Auto-rotate based on EXIF orientation
            img = ImageOps.exif_transpose(img)

            if img.mode != "RGB":
                img = img.convert("RGB")

            # Token digits are small; keep more resolution than a photo needs
            max_size = (1600, 1600)
            if (img.size[0] > max_size[0] or
                    img.size[1] > max_size[1]):
                img.thumbnail(max_size, Image.Resampling.LANCZOS)
                logger.info(f"Resized image to {img.size}")

            return img

        except Exception as e:
            logger.error(f"Failed to preprocess image: {e}")
            raise

    @retry(
        retry=retry_if_exception_type(_TRANSIENT_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _generate_content(self, contents: list, generation_config: GenerationConfig):
        return self.model.generate_content(
            contents=contents,
            generation_config=generation_config
        )

    def _build_contents(self, text: Optional[str], image_bytes: Optional[bytes]) -> list:
        raw_text = json.dumps(text or "", ensure_ascii=False)

        if image_bytes and self.use_vision:
            img = self.preprocess_image(image_bytes)
            img_byte_arr = BytesIO()
            img.save(img_byte_arr, format="JPEG", quality=90, optimize=True)
            image_part = Part.from_data(
                mime_type="image/jpeg",
                data=img_byte_arr.getvalue()
            )
            return [VISION_EXTRACTION_PROMPT.format(raw_text=raw_text), image_part]

        if not text:
            raise ValueError("Either text or image_bytes must be provided")
        return [TOKEN_EXTRACTION_PROMPT.format(raw_text=raw_text)]

    def extract_receipt_data(
        self,
        text: Optional[str] = None,
        image_bytes: Optional[bytes] = None
    ) -> Optional[TokenReceipt]:
        """
        Parse a token receipt with Gemini.

        Args:
            text: Raw OCR text
            image_bytes: Receipt photo, used when vision parsing is enabled

        Returns:
            TokenReceipt, or None on any failure
        """
        response_text = None
        try:
            contents = self._build_contents(text, image_bytes)

            generation_config = GenerationConfig(
                response_mime_type="application/json",
                response_schema=TOKEN_RECEIPT_SCHEMA,
            )

            response = self._generate_content(contents, generation_config)
            self._log_token_usage(response)

            # Clean up markdown code blocks if present
            response_text = _CODE_FENCE.sub("", response.text).strip()
            logger.info(f"Gemini response: {response_text}")

            data = json.loads(response_text)
            receipt = TokenReceipt.model_validate(data)

            logger.info(
                f"Extracted token receipt: idpel={receipt.idpel} "
                f"nominal={receipt.nominal} kwh={receipt.kwh}"
            )
            return receipt

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON from Gemini response: {e}")
            logger.error(f"Response text: {response_text}")
            return None

        except ValidationError as e:
            logger.error(f"Gemini response does not match the token schema: {e}")
            return None

        except Exception as e:
            logger.error(f"Failed to extract receipt data: {e}")
            if response_text is not None:
                logger.error(f"Gemini response was: {response_text}")
            return None

    async def parse(
        self,
        text: Optional[str] = None,
        image: Optional[bytes] = None,
    ) -> Optional[TokenReceipt]:
        """Async entry point used by the extraction orchestrator."""
        return await asyncio.to_thread(self.extract_receipt_data, text, image)

    @staticmethod
    def _log_token_usage(response) -> Optional[Dict[str, int]]:
        usage = getattr(response, "usage_metadata", None)
        if usage is None:
            return None
        token_usage = {
            'prompt_token_count': getattr(usage, 'prompt_token_count', 0),
            'candidates_token_count': getattr(usage, 'candidates_token_count', 0),
            'total_token_count': getattr(usage, 'total_token_count', 0),
        }
        logger.info(f"Token usage: {token_usage}")
        return token_usage
