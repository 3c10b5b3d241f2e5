# chefai/services/parsing.py
# Pull JSON out of free-text model replies and validate it.
# Every failure is a MalformedResponse; callers decide whether to fall back.

from __future__ import annotations
import json
import re
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from chefai.services.errors import MalformedResponse

M = TypeVar("M", bound=BaseModel)

ARRAY_RE = re.compile(r"\[[\s\S]*\]")
OBJECT_RE = re.compile(r"\{[\s\S]*\}")

def extract_json_array(text: str) -> List[Any]:
    # first "[" through last "]" (greedy), like the reply formats we ask for
    m = ARRAY_RE.search(text or "")
    if not m:
        raise MalformedResponse("no JSON array in model reply")
    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"invalid JSON array: {e}") from e
    if not isinstance(data, list):
        raise MalformedResponse("JSON is not an array")
    return data

def extract_json_object(text: str) -> Dict[str, Any]:
    m = OBJECT_RE.search(text or "")
    if not m:
        raise MalformedResponse("no JSON object in model reply")
    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"invalid JSON object: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponse("JSON is not an object")
    return data

def parse_list(text: str, model: Type[M]) -> List[M]:
    items = extract_json_array(text)
    try:
        return TypeAdapter(List[model]).validate_python(items)
    except ValidationError as e:
        raise MalformedResponse(f"{model.__name__} validation failed: {e.error_count()} error(s)") from e

def parse_object(text: str, model: Type[M]) -> M:
    obj = extract_json_object(text)
    try:
        return model.model_validate(obj)
    except ValidationError as e:
        raise MalformedResponse(f"{model.__name__} validation failed: {e.error_count()} error(s)") from e
