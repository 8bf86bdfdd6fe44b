"""Prompts for Gemini - PLN token receipt parsing."""

SYSTEM_PROMPT = """You are a specialized parser for Indonesian PLN prepaid \
electricity receipts (Struk PLN Prabayar). Your primary goal is to turn messy \
OCR text, and the receipt photo when one is given, into a single valid JSON \
object. You must adhere strictly to the specified JSON schema and must not \
include any additional commentary, markdown formatting, or text outside of \
the JSON object.

If the text is unreadable or not a PLN token receipt, return the required \
JSON fields with empty strings."""

TOKEN_EXTRACTION_PROMPT = """Extract the following fields from the messy \
OCR text of a PLN token receipt below.

Fields to extract:
- idpel: customer number, 11-12 digits (string)
- nama: customer name (string)
- tarif: tariff/power class, e.g. "R1M/900 VA" (string)
- kwh: energy quantity, e.g. "123,4" (string)
- nominal: token face value, e.g. "20000" (string)
- admin: administrative fee, e.g. "2500" (string)
- total: total payment, e.g. "22500" (string)
- ppn: tax, e.g. "0" (string)
- token: 20-digit token code (string)

Rules:
1. "nominal" is the value of the token (e.g. Rp 20.000), NOT the total payment.
2. "tarif" must be extracted EXACTLY as it appears in the text, preserving \
spaces, slashes and dots (e.g. "R1 / 450.00 VA" or "R1M / 900 VA").
3. Correct obvious OCR typos in numbers (e.g. "l" -> "1", "O" -> "0").
4. KWh formatting:
   - A 2-digit value (e.g. "46") becomes "46,0".
   - A value with 3 or more digits (e.g. "3530" or "14090") has 2 hidden \
decimal places: "3530" -> "35,3"; "14090" -> "140,9".
   - Use comma "," as the decimal separator.
5. Preserve decimal separators, Indonesian style (comma).
6. "token" contains ONLY 20 digits, no spaces or special characters.
7. Money values (nominal, admin, total) contain digits only.

OCR TEXT:
{raw_text}"""

VISION_EXTRACTION_PROMPT = """Read the attached PLN token receipt photo and \
extract the same fields under the same rules as below. Prefer the photo when \
it disagrees with the OCR text.

""" + TOKEN_EXTRACTION_PROMPT

TOKEN_RECEIPT_SCHEMA = {
    "type": "object",
    "properties": {
        "idpel": {
            "type": "string",
            "description": "IDPEL / Nomor Pelanggan, 11-12 digits"
        },
        "nama": {
            "type": "string",
            "description": "Customer name"
        },
        "tarif": {
            "type": "string",
            "description": "Tarif/Daya exactly as printed, e.g. R1M/900 VA"
        },
        "kwh": {
            "type": "string",
            "description": "Jumlah KWH with comma decimal, e.g. 35,3"
        },
        "nominal": {
            "type": "string",
            "description": "Rp Stroom/Token face value, digits only"
        },
        "admin": {
            "type": "string",
            "description": "Biaya Admin, digits only"
        },
        "total": {
            "type": "string",
            "description": "Total tagihan, digits only"
        },
        "ppn": {
            "type": "string",
            "description": "PPn amount"
        },
        "token": {
            "type": "string",
            "description": "Stroom/Nomor Token, exactly 20 digits"
        }
    },
    "required": [
        "idpel",
        "nama",
        "tarif",
        "kwh",
        "nominal",
        "admin",
        "total",
        "ppn",
        "token"
    ]
}
