from __future__ import annotations

from typing import Optional, Sequence

import httpx

from store.models import ChatTurn, Product
from utils.logger import get_logger
from utils.pure import CURRENCY

_logger = get_logger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

MISSING_KEY_REPLY = (
    "I'm sorry, I cannot connect to the server right now (Missing API Key)."
)
ERROR_REPLY = "I'm having trouble thinking right now. Please try again later."
EMPTY_REPLY = "I didn't catch that. Could you please rephrase?"

SYSTEM_INSTRUCTION = """You are "Yellow Bot", the advanced AI assistant for Yellow Mart, a high-performance e-commerce platform in Bangladesh.
Your goal is to help customers find products, explain features, and assist with store policies.
You have access to a list of products in the store context.
Be concise, friendly, and professional. Use emojis sparingly.
If a user asks about a product not in the context, suggest similar items or apologize.
Always emphasize the "Yellow Mart" guarantee of speed and quality.
Prices are in Bangladeshi Taka (BDT/৳).
"""


def _plain_number(value: float):
    return int(value) if float(value).is_integer() else value


def product_context(products: Sequence[Product]) -> str:
    return "\n".join(
        f"- {p.name} ({CURRENCY}{_plain_number(p.price)}): {p.description} (Stock: {p.stock})"
        for p in products
    )


class ShopAssistant:
    """
    Chat proxy to the Gemini generateContent endpoint.
    reply() never raises; failures come back as fixed apology strings.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._transport = transport

    def build_request(
        self, history: Sequence[ChatTurn], message: str, products: Sequence[Product]
    ) -> dict:
        instruction = (
            f"{SYSTEM_INSTRUCTION}\n\nCurrent Product Inventory:\n"
            f"{product_context(products)}"
        )
        contents = [{"role": t.role, "parts": [{"text": t.text}]} for t in history]
        contents.append({"role": "user", "parts": [{"text": message}]})
        return {
            "systemInstruction": {"parts": [{"text": instruction}]},
            "contents": contents,
            "generationConfig": {"temperature": 0.7},
        }

    async def reply(
        self, history: Sequence[ChatTurn], message: str, products: Sequence[Product]
    ) -> str:
        if not self._api_key:
            return MISSING_KEY_REPLY

        body = self.build_request(history, message, products)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    GEMINI_URL.format(model=self._model),
                    params={"key": self._api_key},
                    json=body,
                )
                resp.raise_for_status()
                data = resp.json()
            candidates = data.get("candidates") or [{}]
            parts = (candidates[0].get("content") or {}).get("parts") or []
            text = "".join(p.get("text", "") for p in parts)
        except (httpx.HTTPError, ValueError, AttributeError, TypeError) as exc:
            _logger.error(f"Chat request failed: {exc!r}")
            return ERROR_REPLY

        return text or EMPTY_REPLY
