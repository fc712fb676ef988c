# app/utils.py
"""Shared utilities: logging setup and contact-number display helpers."""
import os
import re
import logging
from dotenv import load_dotenv

load_dotenv()

def get_logger(name=__name__):
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        level=getattr(logging, level, logging.INFO)
    )
    return logging.getLogger(name)

logger = get_logger("signage-sync")


def _digits(number: str) -> str:
    return re.sub(r"\D", "", number)


def format_display_number(number, fallback: str) -> str:
    """Normalize a stored contact number for the panel.

    Ten digits (area code + 8) get the mobile 9 inserted after the area code,
    eleven digits are regrouped as-is; anything else is returned untouched.
    """
    if not number:
        return fallback
    digits = _digits(number)
    if len(digits) == 10:
        return f"({digits[:2]}) 9 {digits[2:6]}-{digits[6:]}"
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2]} {digits[3:7]}-{digits[7:]}"
    return number


def whatsapp_link(number, fallback: str) -> str:
    digits = _digits(number or fallback)
    if len(digits) == 10:
        digits = digits[:2] + "9" + digits[2:]
    return f"https://wa.me/+55{digits}"
