# backend/utils/barcode.py
import re

EAN13_DATA_LENGTH = 12  # the 13th digit is the check digit added by the encoder


def barcode_payload(sku: str, barcode_type: str) -> str:
    """Data to encode for a product's barcode.

    EAN-13 only takes digits, so the SKU's digits are right-padded with zeros
    and cut to 12. Every other symbology encodes the SKU unchanged.
    """
    if barcode_type == "ean13":
        digits = re.sub(r"[^0-9]", "", sku)
        return digits.ljust(EAN13_DATA_LENGTH, "0")[:EAN13_DATA_LENGTH]
    return sku
