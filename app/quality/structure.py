from typing import Any

from app.errors import GenerationFailed


def validate_structure(parsed: Any, sequence_length: int) -> None:
    """
    Fatal structural checks. Rewrites each message's `step` to its 1-based position
    instead of rejecting misnumbered output.
    """
    if not isinstance(parsed, dict):
        raise GenerationFailed("root is not an object")
    if not isinstance(parsed.get("analysis"), dict):
        raise GenerationFailed("missing analysis")
    if not isinstance(parsed.get("messages"), list):
        raise GenerationFailed("missing messages")
    confidence = parsed.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise GenerationFailed("missing confidence")

    messages = parsed["messages"]
    if len(messages) != sequence_length:
        raise GenerationFailed(f"message count mismatch: expected {sequence_length}, got {len(messages)}")

    for index, msg in enumerate(messages):
        if not isinstance(msg, dict):
            raise GenerationFailed(f"message {index + 1} invalid")
        msg["step"] = index + 1
        if not isinstance(msg.get("message"), str) or not msg["message"].strip():
            raise GenerationFailed(f"message {index + 1} empty")
        if not isinstance(msg.get("reasoning"), str) or not msg["reasoning"].strip():
            raise GenerationFailed(f"reasoning {index + 1} empty")
