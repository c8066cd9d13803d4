"""Prompt composition for the image generator.

The final request prompt is composed from up to four user-controlled parts::

    [Style keywords], [Base prompt]. Avoid the following: [negative terms].

- The style prefix is present only when a Style Core is selected.
- The avoid clause aggregates the style's negative keywords and the user's
  negative prompt.  Both are comma-split and trimmed; the union keeps the
  first occurrence of each term (case-sensitive) in that order.
- The avoid clause is omitted when no negative terms remain.

Usage
-----
::

    compiled = build_prompt(
        "a fox in snow",
        style=get_style("hyperrealism"),
        negative_prompt="text, watermark",
    )
"""

from __future__ import annotations

from collections.abc import Iterable

from aetherlens.core.models import StyleCore
from aetherlens.core.validation import ValidationError

EMPTY_PROMPT_MESSAGE = "Please enter a prompt to generate images."
AVOID_PREFIX = "Avoid the following:"


def split_terms(text: str | None) -> list[str]:
    """Split a comma-separated keyword list, dropping blank entries."""
    if not text:
        return []
    return [term.strip() for term in text.split(",") if term.strip()]


def unique_terms(*groups: Iterable[str]) -> list[str]:
    """Concatenate term groups, keeping only the first occurrence of each term."""
    seen: set[str] = set()
    result: list[str] = []
    for group in groups:
        for term in group:
            if term not in seen:
                seen.add(term)
                result.append(term)
    return result


def build_prompt(
    base_prompt: str,
    *,
    style: StyleCore | None = None,
    negative_prompt: str = "",
) -> str:
    """Compose the final request prompt.

    Args:
        base_prompt: The user's description, used as typed.  Must contain
            non-whitespace text.
        style: Selected Style Core, or ``None``.
        negative_prompt: Free-text, comma-separated terms to avoid.

    Returns:
        The composed prompt.

    Raises:
        ValidationError: If ``base_prompt`` is empty or whitespace-only.
    """
    if not base_prompt or not base_prompt.strip():
        raise ValidationError(EMPTY_PROMPT_MESSAGE)

    prompt = base_prompt

    # --- Style prefix ------------------------------------------------------
    if style is not None and style.keywords.strip():
        prompt = f"{style.keywords.strip()}, {prompt}"

    # --- Avoid clause ------------------------------------------------------
    negatives = unique_terms(
        split_terms(style.negative_keywords if style is not None else ""),
        split_terms(negative_prompt),
    )
    if negatives:
        prompt += f". {AVOID_PREFIX} {', '.join(negatives)}."

    return prompt


def merge_negative_terms(existing: str, addition: str) -> str:
    """Add a negative preset to the current negative prompt.

    Terms already present are not repeated.  An empty ``existing`` prompt is
    replaced by ``addition`` as-is.
    """
    if not existing:
        return addition
    return ", ".join(unique_terms(split_terms(existing), split_terms(addition)))
