"""
Portion - Shopping List Payload Encoding.

A shopping list is shared as a URL segment: the {title, recipes} payload
as compact JSON, base64 encoded from UTF-8, then URL-escaped.
"""

import base64
import json
import logging
from urllib.parse import quote, unquote

from pydantic import ValidationError

from portion.models import ShoppingListData

logger = logging.getLogger(__name__)


class ShoppingListEncoder:
    """Encodes and decodes shopping list payloads for URLs."""

    def encode(self, data: ShoppingListData | dict) -> str:
        """
        Encode shopping list data to a URL-safe string.

        Args:
            data: Shopping list data (model or plain dict)

        Returns:
            URL-escaped base64 string

        Raises:
            pydantic.ValidationError: If the data is invalid
        """
        validated = ShoppingListData.model_validate(data)
        payload = json.dumps(validated.model_dump(), separators=(",", ":"), ensure_ascii=False)
        encoded = base64.b64encode(payload.encode("utf-8")).decode("ascii")
        return quote(encoded, safe="")

    def decode(self, encoded: str) -> ShoppingListData | None:
        """
        Decode a URL segment back to shopping list data.

        Args:
            encoded: URL-escaped base64 string

        Returns:
            ShoppingListData, or None if the payload is malformed or invalid
        """
        try:
            raw = base64.b64decode(unquote(encoded), validate=True)
            return ShoppingListData.model_validate(json.loads(raw.decode("utf-8")))
        except (ValueError, ValidationError) as e:
            logger.warning(f"Failed to decode shopping list data: {e}")
            return None

    def generate_url(self, data: ShoppingListData | dict, locale: str, origin: str) -> str:
        """
        Build a shareable shopping list URL.

        Args:
            data: Shopping list data
            locale: Locale segment (e.g. "en", "nl")
            origin: Site origin (e.g. "https://example.com")

        Returns:
            Complete URL
        """
        return f"{origin}/{locale}/shopping/{self.encode(data)}"
