# src/stockroom/llm05/advice_guardrails.py

"""
Advice Guardrails
=================

Checks applied before any text-generation request.

Rules:
------
- Prompt must be a non-empty string
- Context must be a plain dictionary
- Context must serialize to strict JSON (no NaN / infinity, no objects)
- No list inside the context may exceed max_items entries

Behavior:
---------
- Fail-fast validation
- No request is sent for a context that fails
"""

import json
from typing import Any, Dict


DEFAULT_MAX_CONTEXT_ITEMS = 50


def validate_prompt(prompt: str) -> bool:

    if not isinstance(prompt, str) or not prompt.strip():
        raise ValueError("Prompt must be a non-empty string.")

    return True


def _check_list_sizes(value: Any, max_items: int, path: str) -> None:

    if isinstance(value, dict):
        for key, item in value.items():
            _check_list_sizes(item, max_items, f"{path}.{key}")

    elif isinstance(value, (list, tuple)):
        if len(value) > max_items:
            raise ValueError(
                f"Context list '{path}' has {len(value)} entries; "
                f"limit is {max_items}."
            )
        for index, item in enumerate(value):
            _check_list_sizes(item, max_items, f"{path}[{index}]")


def validate_advice_context(
    context: Dict[str, Any],
    max_items: int = DEFAULT_MAX_CONTEXT_ITEMS,
) -> bool:
    """
    Validate the context object sent alongside a prompt.

    Returns
    -------
    bool
        True if validation passes.

    Raises
    ------
    ValueError
        If the context is not a bounded, JSON-safe dictionary.
    """

    if not isinstance(context, dict):
        raise ValueError("Advice context must be a dictionary.")

    if not isinstance(max_items, int) or max_items <= 0:
        raise ValueError("max_items must be a positive integer.")

    try:
        json.dumps(context, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Advice context must be JSON-serializable: {exc}"
        ) from exc

    _check_list_sizes(context, max_items, "context")

    return True
