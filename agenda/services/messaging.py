"""Client messaging links."""

import re

WHATSAPP_BASE_URL = "https://wa.me/"


def whatsapp_url(phone: str, country_code: str) -> str:
    """
    Build a WhatsApp chat link for a local phone number.

    Args:
        phone: Stored client phone (10 digits)
        country_code: Dialing prefix without ``+``

    Returns:
        ``https://wa.me/+<country code><digits>``
    """
    digits = re.sub(r"\D", "", phone)
    return f"{WHATSAPP_BASE_URL}+{country_code}{digits}"
