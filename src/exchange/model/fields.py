"""
Field types shared by the raw exchange models.

Exchanges send numbers as JSON numbers or as strings, and timestamps as ISO
strings of varying precision or as epoch seconds. These annotated types
normalize all of that with culture-invariant semantics. Anything that does
not parse fails validation instead of defaulting to zero.
"""

import functools
import re
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, TypeAdapter, ValidationError

from src.exchange.enums import TradeSide
from src.exchange.errors import ParseError

ModelT = TypeVar("ModelT", bound=BaseModel)
ResultT = TypeVar("ResultT")

# microsecond precision is all datetime keeps
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a raw JSON value into a Decimal.

    Floats go through ``str`` so the printed value is kept rather than its
    binary approximation. Booleans, blanks and locale formatted strings
    (e.g. ``"3400,00"``) are rejected.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        result = Decimal(str(value))
        if not result.is_finite():
            raise ValueError(f"Non-finite number: {value!r}")
        return result
    if isinstance(value, str) and value.strip():
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal string: {value!r}") from e
        if not result.is_finite():
            raise ValueError(f"Non-finite decimal: {value!r}")
        return result
    raise ValueError(f"Expected a number, got {value!r}")


def to_utc_datetime(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp, treating naive values as UTC.

    Handles the seven digit fractional seconds .NET back ends emit.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            text = _EXCESS_FRACTION.sub(r"\1", value.strip().replace("Z", "+00:00"))
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"Invalid timestamp: {value!r}") from e
    else:
        raise ValueError(f"Expected a timestamp string, got {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def from_unix_seconds(value: Any) -> datetime:
    """Parse epoch seconds (number or numeric string) into a UTC datetime."""
    seconds = to_decimal(value)
    try:
        return datetime.fromtimestamp(float(seconds), UTC)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"Epoch seconds out of range: {value!r}") from e


def to_text(value: Any) -> str:
    """Render a scalar JSON value as text (ids arrive as ints or strings)."""
    if isinstance(value, bool) or value is None or isinstance(value, dict | list):
        raise ValueError(f"Expected a scalar, got {value!r}")
    return str(value)


def to_side(value: Any) -> TradeSide:
    """Parse an exchange side string ("Buy", "SELL", ...)."""
    if not isinstance(value, str):
        raise ValueError(f"Expected a side string, got {value!r}")
    return TradeSide.from_exchange(value)


def to_flag(value: Any) -> bool:
    """Parse a boolean that may arrive as ``true``, ``1`` or ``"true"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in {"true", "1", "false", "0"}:
        return value.strip().lower() in {"true", "1"}
    raise ValueError(f"Expected a boolean flag, got {value!r}")


InvariantDecimal = Annotated[Decimal, BeforeValidator(to_decimal)]
UtcDatetime = Annotated[datetime, BeforeValidator(to_utc_datetime)]
UnixDatetime = Annotated[datetime, BeforeValidator(from_unix_seconds)]
ScalarText = Annotated[str, BeforeValidator(to_text)]
ExchangeSide = Annotated[TradeSide, BeforeValidator(to_side)]
Flag = Annotated[bool, BeforeValidator(to_flag)]


def parse_model(model: type[ModelT], raw: Any) -> ModelT:
    """
    Validate one raw JSON object into ``model``.

    Raises:
        ParseError: If the object is missing fields or carries bad values

    """
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise ParseError(f"Malformed {model.__name__}: {e}") from e


def parse_list(model: type[ModelT], raw: Any) -> list[ModelT]:
    """
    Validate a raw JSON array into a list of ``model``.

    Raises:
        ParseError: If ``raw`` is not an array or any element is malformed

    """
    try:
        return TypeAdapter(list[model]).validate_python(raw)  # type: ignore[valid-type]
    except ValidationError as e:
        raise ParseError(f"Malformed {model.__name__} list: {e}") from e


def require_mapping(raw: Any, context: str) -> Mapping[str, Any]:
    """Ensure a decoded response is a JSON object."""
    if not isinstance(raw, Mapping):
        raise ParseError(f"Expected an object for {context}, got {type(raw).__name__}")
    return raw


def reports_parse_errors(convert: Callable[..., ResultT]) -> Callable[..., ResultT]:
    """
    Decorate a raw-to-canonical conversion so rejected values raise ParseError.

    The canonical models carry their own constraints (non-negative prices,
    non-empty symbols); a raw value that passes the raw model but breaks
    one of those is still a malformed response.
    """

    @functools.wraps(convert)
    def wrapper(*args: Any, **kwargs: Any) -> ResultT:
        try:
            return convert(*args, **kwargs)
        except ValidationError as e:
            raise ParseError(f"{convert.__qualname__} rejected exchange data: {e}") from e

    return wrapper
