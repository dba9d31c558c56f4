# src/stockroom/llm05/advice_client.py

"""
Advice Client
=============

Sends a prompt plus a computed context to a Gemini-style
``generateContent`` endpoint and returns the reply text.

Responsibilities:
-----------------
- Build the mentor system prompt around the context
- Resolve the API key from the environment
- POST the request with requests
- Turn every network / HTTP / payload failure into a friendly message

The calculation engine never depends on the returned text.
"""

from typing import Any, Dict, Optional
import json
import logging
import os

import requests

from stockroom.llm05.advice_guardrails import (
    validate_prompt,
    validate_advice_context,
    DEFAULT_MAX_CONTEXT_ITEMS,
)


logger = logging.getLogger(__name__)


DEFAULT_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
DEFAULT_TIMEOUT_SECONDS = 30

API_ERROR_MESSAGE = (
    "I'm having a spot of bother connecting to my brain right now. "
    "Please check your API Key settings."
)
EMPTY_REPLY_MESSAGE = (
    "I'm having a spot of bother thinking right now. Ask me again in a moment."
)
CONNECTION_ERROR_MESSAGE = (
    "I'm having trouble connecting. Please check your internet."
)

DEFAULT_PERSONA = """You are a supportive retail mentor to independent shopkeepers in the UK.

**CRITICAL INSTRUCTIONS:**
1. **Language:** ALWAYS use British English spelling (e.g., colour, behaviour, organise, centre, programme).
2. **Formatting:**
   - Use **Markdown Tables** for any data comparisons or lists of figures.
   - Use **double asterisks** to bold key metrics and headings.
   - Use standard bullet points for lists.
3. **Tone:** Warm, encouraging, plain English, and jargon-free.

**Your Core Beliefs:**
1. "Profit is sanity, turnover is vanity" -> Focus on money in the pocket, not just sales.
2. "Clear the decks" -> Don't be afraid to discount old stock to get cash back.
3. "Magic Moments" -> Retail is about connection, not just transactions.
4. "Stock Life" -> Understand how long your stock will last (Weeks to Sell)."""


def build_system_prompt(context: Dict[str, Any], persona: Optional[str] = None) -> str:
    return (
        f"{persona or DEFAULT_PERSONA}\n\n"
        f"Context Data provided: {json.dumps(context)}\n\n"
        "Provide a friendly, actionable response."
    )


def _extract_text(payload: Any) -> str:
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""

    return text if isinstance(text, str) else ""


def generate_advice(
    prompt: str,
    context: Optional[Dict[str, Any]] = None,
    system_prompt_override: Optional[str] = None,
    *,
    config: Optional[Dict] = None,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Request narrative advice.

    Parameters
    ----------
    prompt : str
        User-facing instruction.
    context : Dict[str, Any], optional
        JSON-safe, already-computed figures.
    system_prompt_override : str, optional
        Replaces the whole system prompt (context is then not embedded).
    config : Dict, optional
        Project configuration; the ``llm`` section is used.
    session : requests.Session, optional
        HTTP session; module-level requests is used when omitted.

    Returns
    -------
    str
        Reply text, or one of the friendly fallback messages.

    Raises
    ------
    ValueError
        If the prompt or context fails the guardrails.
    """

    context = {} if context is None else context
    llm_cfg = (config or {}).get("llm", {})

    max_items = llm_cfg.get("max_context_items", DEFAULT_MAX_CONTEXT_ITEMS)

    validate_prompt(prompt)
    validate_advice_context(context, max_items)

    system_prompt = system_prompt_override or build_system_prompt(
        context, llm_cfg.get("system_prompt")
    )

    api_key_env = llm_cfg.get("api_key_env", DEFAULT_API_KEY_ENV)
    api_key = os.environ.get(api_key_env, "")

    if not api_key:
        logger.warning(f"Environment variable '{api_key_env}' not set; advice skipped.")
        return API_ERROR_MESSAGE

    url = llm_cfg.get("endpoint", DEFAULT_ENDPOINT).format(
        model=llm_cfg.get("model", DEFAULT_MODEL)
    )

    payload = {
        "contents": [{"parts": [{"text": prompt}]}],
        "systemInstruction": {"parts": [{"text": system_prompt}]},
    }

    if "temperature" in llm_cfg:
        payload["generationConfig"] = {"temperature": llm_cfg["temperature"]}

    http = session or requests

    try:
        response = http.post(
            url,
            params={"key": api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
            timeout=llm_cfg.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
        )
    except requests.RequestException:
        logger.exception("Advice request failed.")
        return CONNECTION_ERROR_MESSAGE

    if not response.ok:
        logger.warning(f"Advice API returned HTTP {response.status_code}.")
        return API_ERROR_MESSAGE

    try:
        data = response.json()
    except ValueError:
        logger.warning("Advice API returned a non-JSON body.")
        return EMPTY_REPLY_MESSAGE

    text = _extract_text(data)

    if not text.strip():
        logger.warning("Advice API returned no candidate text.")
        return EMPTY_REPLY_MESSAGE

    return text
