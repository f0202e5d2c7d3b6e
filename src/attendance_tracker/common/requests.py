from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import request

from ..core.exceptions import ValidationError


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def pick(data: Mapping[str, Any], *names: str, default: Optional[Any] = None) -> Any:
    """First present key wins; accepts both snake_case and camelCase spellings."""
    for name in names:
        if name in data and data[name] not in (None, ""):
            return data[name]
    return default
