"""Upstream Payload Parsing — turn decoded JSON into typed records.

Invariants:
    - parse_record: a payload the schema rejects is an InternalError (upstream contract broken)
    - parse_optional: a payload the schema rejects is treated as unavailable (None)
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from bff.core.errors import ErrorContext, InternalError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def parse_record(model: type[M], payload: Any, service: str) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.error(
            f"{service} payload does not match {model.__name__}: {e}",
            extra={"service": service},
        )
        raise InternalError(
            f"{service} service returned an invalid response",
            ErrorContext(service=service),
        ) from e


def parse_optional(model: type[M], payload: Any, service: str) -> M | None:
    if payload is None:
        return None
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.warning(
            f"Ignoring malformed {service} {model.__name__}: {e}",
            extra={"service": service},
        )
        return None
