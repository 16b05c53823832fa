"""
Shared pydantic configuration and JSON document parsing for wire models.

Response models use ``WireModel`` (``extra="allow"``) so vendor keys are kept
and re-emitted; request models use ``RequestModel`` (frozen). Both dump with
aliases so fields such as ``schema`` keep their wire names.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import ResponseError, ResponseErrorKind, provider_error_from_obj

M = TypeVar("M", bound="WireModel")


class WireModel(BaseModel):
    """Base for response-side models; unknown keys are retained."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire mapping: keys that were set (including explicit nulls) and extras."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


class RequestModel(BaseModel):
    """Base for request-side models; immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire mapping with ``None`` fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_document(text: str, model_cls: Type[M], *, what: Optional[str] = None) -> M:
    """Parse one JSON document into ``model_cls``.

    Raises:
        ResponseError: ``MALFORMED_JSON`` when ``text`` is not JSON,
            ``PROVIDER_ERROR`` when it is an ``{"error": ...}`` object and
            ``SCHEMA_MISMATCH`` when it does not fit ``model_cls``.
    """
    label = what or model_cls.__name__
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise ResponseError(
            ResponseErrorKind.MALFORMED_JSON,
            f"{label} is not valid JSON",
            context=text,
            cause=exc,
        ) from exc
    provider_error = provider_error_from_obj(data)
    if provider_error is not None:
        raise ResponseError(
            ResponseErrorKind.PROVIDER_ERROR,
            str(provider_error.get("message") or "provider reported an error"),
            context=text,
            provider_error=provider_error,
        )
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise ResponseError(
            ResponseErrorKind.SCHEMA_MISMATCH,
            f"{label} does not match the expected schema ({exc.error_count()} errors)",
            context=text,
            cause=exc,
        ) from exc


__all__ = ["WireModel", "RequestModel", "parse_document"]
