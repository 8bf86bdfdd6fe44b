"""Pick an extraction path for a receipt and always hand back a record."""

from enum import Enum
from typing import Optional, Protocol, Union

from loguru import logger
from pydantic import ValidationError

from ..models.receipt import PaymentReceipt, ReceiptMode, TokenReceipt
from .catalog import DEFAULT_CATALOG, ExtractionCatalog
from .payment_extractor import PaymentExtractor
from .token_extractor import TokenExtractor


class AIReceiptParser(Protocol):
    """AI collaborator: structured token record from text or image, or None."""

    async def parse(
        self,
        text: Optional[str] = None,
        image: Optional[bytes] = None,
    ) -> Optional[TokenReceipt]:
        ...


class ExtractionState(str, Enum):
    AI_ATTEMPT = "ai_attempt"
    RULE_FALLBACK = "rule_fallback"
    DONE = "done"


class ReceiptExtractor:
    """
    Extraction orchestrator.

    Payment receipts always go through the rule-based extractor. Token
    receipts try the AI parser first (when one is configured) and fall back
    to the rule-based extractor exactly once if it fails. The two results
    are never merged.
    """

    def __init__(
        self,
        ai_parser: Optional[AIReceiptParser] = None,
        catalog: ExtractionCatalog = DEFAULT_CATALOG,
    ):
        self.ai_parser = ai_parser
        self.token_extractor = TokenExtractor(catalog)
        self.payment_extractor = PaymentExtractor(catalog)

    def extract_rule_based(
        self,
        raw_text: Optional[str],
        mode: Union[ReceiptMode, str],
    ) -> Union[TokenReceipt, PaymentReceipt]:
        """Deterministic extraction, no collaborators involved."""
        if ReceiptMode(mode) is ReceiptMode.PAYMENT:
            return self.payment_extractor.extract(raw_text)
        return self.token_extractor.extract(raw_text)

    async def _try_ai(
        self,
        raw_text: str,
        image: Optional[bytes],
    ) -> Optional[TokenReceipt]:
        try:
            result = await self.ai_parser.parse(text=raw_text, image=image)
        except Exception as e:
            # The parser is supposed to return None on failure
            logger.error(f"AI parser raised instead of returning None: {e}")
            return None

        if result is None:
            return None
        if isinstance(result, TokenReceipt):
            return result
        if isinstance(result, PaymentReceipt):
            logger.warning("AI parser returned a payment record for a token receipt")
            return None

        try:
            return TokenReceipt.model_validate(result)
        except ValidationError as e:
            logger.warning(f"AI parser result does not match the token schema: {e}")
            return None

    async def extract(
        self,
        raw_text: Optional[str],
        mode: Union[ReceiptMode, str] = ReceiptMode.TOKEN,
        image: Optional[bytes] = None,
    ) -> Union[TokenReceipt, PaymentReceipt]:
        """
        Turn OCR text into a receipt record.

        Args:
            raw_text: Text recognized by OCR, kept verbatim in ``raw``
            mode: "token" or "payment"
            image: Original image, forwarded to a vision-capable AI parser

        Returns:
            A fresh TokenReceipt or PaymentReceipt, never None
        """
        mode = ReceiptMode(mode)
        raw_text = raw_text or ""

        if mode is ReceiptMode.PAYMENT:
            logger.info("Payment mode: using rule-based extraction")
            return self.payment_extractor.extract(raw_text)

        state = ExtractionState.AI_ATTEMPT if self.ai_parser else ExtractionState.RULE_FALLBACK
        record: Optional[TokenReceipt] = None

        while state is not ExtractionState.DONE:
            if state is ExtractionState.AI_ATTEMPT:
                record = await self._try_ai(raw_text, image)
                if record is not None:
                    record = record.model_copy(update={"raw": raw_text})
                    logger.info("AI parsing accepted")
                    state = ExtractionState.DONE
                else:
                    logger.warning("AI parsing failed, using rule-based fallback")
                    state = ExtractionState.RULE_FALLBACK
            else:
                record = self.token_extractor.extract(raw_text)
                state = ExtractionState.DONE

        return record
