"""Response normalizer — turns heterogeneous API bodies into one uniform shape.

The backend answers in several envelopes (``{data}``, ``{items}``, bare
lists, ``{message | _message | detail | title}``, ``{errors: [...]}``). Each
extractor probes the known fields in a fixed priority order and falls back
to a literal, so callers never have to care which envelope arrived.

Failures are always reduced to a display string; nothing raised by a fault
object escapes ``extract_api_error``.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from flowtap.application.schemas.envelope import NormalizedResponse, PaginationSchema

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Success"
DEFAULT_ERROR_MESSAGE = "An error occurred"

_MISSING = object()


def is_present(value: Any) -> bool:
    """Truthiness as the API contract understands it.

    ``None``, ``False``, numeric zero and the empty string are absent. Empty
    lists and mappings are present: ``{"data": []}`` is a valid empty page.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, str) and not value:
        return False
    return True


def _field(source: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an object attribute, else None."""
    if isinstance(source, Mapping):
        return source.get(name)
    if isinstance(source, (str, bytes, list, tuple)):
        return None
    return getattr(source, name, None)


def join_error_items(errors: Any) -> str | None:
    """Join a validation ``errors`` array into ``"a, b"``; None if unusable."""
    if not isinstance(errors, (list, tuple)) or not errors:
        return None
    parts = []
    for item in errors:
        text = _field(item, "message")
        if not is_present(text):
            text = _field(item, "error")
        if not is_present(text):
            text = item
        parts.append(str(text))
    return ", ".join(parts)


def extract_api_data(body: Any) -> Any:
    """Prefer ``body.data``, then ``body.items``, then the body itself."""
    if isinstance(body, Mapping):
        data = body.get("data")
        if is_present(data):
            return data
        items = body.get("items")
        if is_present(items):
            return items
    return body


def extract_api_message(body: Any, default: str = DEFAULT_SUCCESS_MESSAGE) -> str:
    """Pick the first present message field of a successful response."""
    if not is_present(body) or not isinstance(body, Mapping):
        return default

    for key in ("message", "_message"):
        if is_present(body.get(key)):
            return str(body[key])

    data = body.get("data")
    if isinstance(data, Mapping) and is_present(data.get("message")):
        return str(data["message"])

    for key in ("detail", "title"):
        if is_present(body.get(key)):
            return str(body[key])

    # ``{data: {detail}}`` success bodies, probed only after every top-level field
    if isinstance(data, Mapping) and is_present(data.get("detail")):
        return str(data["detail"])

    joined = join_error_items(body.get("errors"))
    if joined:
        return joined
    return default


def extract_api_error(error: Any, default: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Reduce any fault object (exception, mapping, string) to a display string."""
    if not is_present(error):
        return default
    if isinstance(error, str):
        return error

    message = _field(error, "message")
    if is_present(message):
        return str(message)
    if isinstance(error, BaseException) and getattr(error, "message", _MISSING) is _MISSING:
        text = str(error)
        if text:
            return text

    data = _field(error, "data")
    if isinstance(data, Mapping):
        for key in ("detail", "title", "message"):
            if is_present(data.get(key)):
                return str(data[key])

    joined = join_error_items(_field(error, "errors"))
    if joined:
        return joined
    return default


def extract_pagination(
    body: Any, fallback: PaginationSchema | None = None
) -> PaginationSchema:
    """Use ``body.pagination`` when sent, else build one from page/limit/total."""
    fallback = fallback or PaginationSchema()
    if not isinstance(body, Mapping):
        return fallback.model_copy()

    pagination = body.get("pagination")
    if is_present(pagination):
        try:
            return PaginationSchema.model_validate(pagination)
        except ValidationError:
            logger.warning("Ignoring malformed pagination block: %r", pagination)

    def _pick(key: str, default: int) -> Any:
        value = body.get(key)
        return default if value is None else value

    try:
        return PaginationSchema(
            page=_pick("page", fallback.page),
            limit=_pick("limit", fallback.limit),
            total=_pick("total", fallback.total),
        )
    except ValidationError:
        logger.warning("Ignoring malformed page/limit/total fields")
        return fallback.model_copy()


def is_api_success(body: Any) -> bool:
    """True when the envelope flags success (``status`` or ``_status``)."""
    if not isinstance(body, Mapping):
        return False
    status = body.get("status")
    return status is True or status == 200 or body.get("_status") == 200


def normalize_success(
    body: Any,
    *,
    default_message: str = DEFAULT_SUCCESS_MESSAGE,
    fallback_pagination: PaginationSchema | None = None,
) -> NormalizedResponse:
    """Build the uniform ``{data, message, pagination}`` view of a success body."""
    return NormalizedResponse(
        data=extract_api_data(body),
        message=extract_api_message(body, default=default_message),
        pagination=extract_pagination(body, fallback_pagination),
    )


def normalize_failure(error: Any, *, default_error: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Failure path of the normalizer — always a string, never raises."""
    try:
        return extract_api_error(error, default=default_error)
    except Exception:
        logger.exception("Could not extract an error message from %r", type(error))
        return default_error
