"""Markdown snippets shown in the status areas of the UI."""

from aetherlens.core.models import Persona


def loading_markdown(tip: str, action: str = "Generating") -> str:
    message = f"⏳ **{action}...**"
    if tip:
        message += f"\n\n💡 *{tip}*"
    return message


def error_markdown(error: str, retry_hint: str = "") -> str:
    """Render an error with the manual retry hint."""
    message = f"❌ **Something went wrong**\n\n{error}"
    if retry_hint:
        message += f"\n\n{retry_hint}"
    return message


def success_markdown(message: str) -> str:
    return f"✅ {message}"


def slots_markdown(used: int, maximum: int) -> str:
    remaining = max(maximum - used, 0)
    if remaining == 0:
        return f"**{used}/{maximum} images** - upload limit reached"
    return f"**{used}/{maximum} images** - {remaining} more allowed"


def persona_markdown(persona: Persona | None) -> str:
    """Render a persona sheet as a Markdown table."""
    if persona is None:
        return ""

    rows = [
        ("Hair", persona.hair),
        ("Eyes", persona.eyes),
        ("Beard", persona.beard),
        ("Face shape", persona.face_shape),
        ("Unique features", ", ".join(persona.unique_features)),
        ("Gender", persona.gender),
        ("Age", "" if persona.age is None else str(persona.age)),
    ]
    lines = ["### Persona Sheet", "", "| Attribute | Value |", "|---|---|"]
    lines.extend(f"| {name} | {value or '-'} |" for name, value in rows)
    return "\n".join(lines)
