"""UI-facing copy builders for notifications, confirmations, and the error panel."""

from __future__ import annotations


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_next_step_hint(next_step: str) -> str:
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_actionable_warning(
    message: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    lines = [_ensure_sentence(message)]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_actionable_success(message: str, *, detail: str | None = None) -> str:
    lines = [_ensure_sentence(message)]
    if detail:
        lines.append(_ensure_sentence(detail))
    return "\n".join(lines)


def build_load_error_message(source: str, why: str) -> str:
    """Error panel text for a failed archive load."""
    return build_actionable_error(
        f"load the archive from {source}",
        why=why,
        next_step=(
            "check that prose.json and poems.json exist there, "
            "or pass a different location with --data"
        ),
    )


def build_storage_error_message(what: str, why: str) -> str:
    return build_actionable_error(
        f"save {what}",
        why=why,
        next_step="check that the data directory is writable and try again",
    )


def build_clear_draft_confirmation_prompt(char_count: int) -> str:
    """Confirmation prompt text for discarding the draft buffer."""
    return (
        f"Clear the draft you are writing ({char_count} character"
        f"{'s' if char_count != 1 else ''})?\n"
        "Saved drafts are not affected."
    )


def build_delete_draft_confirmation_prompt(preview: str) -> str:
    return f"Delete the saved draft “{preview}”?\nThis cannot be undone."


def build_draft_saved_notification(draft_count: int) -> str:
    return build_actionable_success(
        "Draft saved",
        detail=f"{draft_count} draft{'s' if draft_count != 1 else ''} kept on this device",
    )


__all__ = [
    "build_actionable_error",
    "build_actionable_success",
    "build_actionable_warning",
    "build_clear_draft_confirmation_prompt",
    "build_delete_draft_confirmation_prompt",
    "build_draft_saved_notification",
    "build_load_error_message",
    "build_next_step_hint",
    "build_storage_error_message",
]
