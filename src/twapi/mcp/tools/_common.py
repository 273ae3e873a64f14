"""
Shared helpers for tool modules.
"""

from typing import Any, Dict

from pydantic import BaseModel


def dump(model: BaseModel) -> Dict[str, Any]:
    """JSON-safe dict of a response model, keyed by field name."""
    return model.model_dump(mode="json")


def present(**fields: Any) -> Dict[str, Any]:
    """Keep only the arguments the caller actually provided."""
    return {k: v for k, v in fields.items() if v is not None}


def ack(message: str, **extra: Any) -> Dict[str, Any]:
    return {"message": message, **extra}
