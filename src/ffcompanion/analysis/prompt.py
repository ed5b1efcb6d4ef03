"""Assemble the chat messages sent to the analysis model."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping

from ffcompanion.errors import AnalysisServiceBadRequest


SYSTEM_PROMPT = (
    "You are a fantasy football expert advising a manager in their league. "
    "Use only the league settings, members and rosters supplied in the message; "
    "if they do not contain what you need, say so rather than guessing. "
    "Give specific, actionable trade and roster advice."
)


def _drop_none(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _drop_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_drop_none(item) for item in value]
    return value


def serialize(value: Any) -> str:
    return json.dumps(_drop_none(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def build_user_message(request: Mapping[str, Any]) -> str:
    sections = [
        ("League", serialize(request["league"])),
        ("League members", serialize(request["users"])),
        ("All rosters", serialize(request["allRosters"])),
        ("My roster", serialize(request["myRoster"])),
        ("Question", str(request["question"]).strip()),
    ]
    return "\n\n".join(f"{title}:\n{body}" for title, body in sections)


def build_messages(request: Mapping[str, Any], *, max_prompt_chars: int | None = None) -> List[Dict[str, str]]:
    user_message = build_user_message(request)
    if max_prompt_chars is not None and len(user_message) > max_prompt_chars:
        raise AnalysisServiceBadRequest(
            f"Prompt is {len(user_message)} characters, above the {max_prompt_chars} character limit"
        )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_message},
    ]
