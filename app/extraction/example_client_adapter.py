"""Offline completion client.

Returns a fixed, schema-valid receipt so the whole pipeline can run without
an AI provider. Also the template for new provider adapters: implement
BaseCompletionClient and register the provider in StructuredExtractorFactory.
"""

import json
from typing import ClassVar

from app.extraction.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Adapter that answers every request with the same empty receipt."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "vendorName": None,
        "invoiceNumber": None,
        "date": None,
        "totalAmount": None,
        "items": [],
        "taxAmount": None,
        "subtotal": None,
        "currency": None,
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, max_tokens, system_prompt, user_prompt, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
