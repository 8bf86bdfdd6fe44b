"""Structured receipt records produced by the extraction engine."""

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ReceiptMode(str, Enum):
    """Which receipt family the text comes from."""

    TOKEN = "token"      # PLN prepaid token purchase
    PAYMENT = "payment"  # PDAM / generic bill payment


class ReceiptBase(BaseModel):
    """Fields shared by every receipt record."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    idpel: str = ""
    nama: str = ""
    admin: str = ""
    total: str = ""
    no_pesanan: str = Field(default="", alias="noPesanan")
    raw: str = ""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # JSON null means "not found"; let the field keep its default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_dict(self) -> Dict[str, str]:
        """Serialize with the public field names (``noPesanan``)."""
        return self.model_dump(by_alias=True, mode="json")


class TokenReceipt(ReceiptBase):
    """PLN prepaid electricity token receipt."""

    mode: Literal["token"] = "token"
    token: str = ""
    tarif: str = ""
    kwh: str = ""
    nominal: str = ""
    ppn: str = "0"
    angsmat: str = "0,00/0,00"


class PaymentReceipt(ReceiptBase):
    """Bill payment receipt (water utility and similar)."""

    mode: Literal["payment"] = "payment"
    lokasi: str = ""
    periode: str = ""
    stand: str = ""
    tagihan: str = ""
    denda: str = ""


ReceiptRecord = Annotated[
    Union[TokenReceipt, PaymentReceipt],
    Field(discriminator="mode"),
]
