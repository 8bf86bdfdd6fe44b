"""Android intent URL that hands ESC/POS bytes to the RawBT print service."""

import base64
from typing import Optional
from urllib.parse import quote

from ..config import settings

RAWBT_PACKAGE = "ru.a402d.rawbtprinter"


def build_intent_url(commands: bytes, fallback_url: Optional[str] = None) -> str:
    """
    Wrap printer commands in a RawBT ``intent:`` URL.

    Opening the URL on an Android device with RawBT installed prints the
    receipt; browsers without the app go to ``fallback_url``.
    """
    fallback_url = settings.rawbt_fallback_url if fallback_url is None else fallback_url
    payload = base64.b64encode(commands).decode("ascii")
    fallback = quote(fallback_url, safe="-_.!~*'()")
    return (
        f"intent:base64,{payload}#Intent;scheme=rawbt;package={RAWBT_PACKAGE};"
        f"S.browser_fallback_url={fallback};end;"
    )
