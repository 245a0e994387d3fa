"""
Utility functions for the application.
"""
import json
from typing import Any, Optional

from fastapi import Request


async def read_json_body(request: Request) -> Optional[Any]:
    """Parsed JSON body, or None when the body is not valid JSON"""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def is_json_request(request: Request) -> bool:
    """True when Content-Type is application/json (parameters such as charset allowed)"""
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == "application/json"
