"""
Validation adapter.

Runs a pydantic model over a raw JSON payload and reports every violation
as a field -> ordered messages map, instead of stopping at the first one.
Messages for pydantic's built-in error types are replaced with Portuguese
ones so they read like the custom validator messages.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

from fornecedor_api.core.exceptions import ValidationFailedError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes FastAPI adds that are not field names
_LOCATION_PREFIXES = ("body", "path", "query", "header", "cookie")

# pydantic error type -> message template, formatted with the error's ctx
ERROR_MESSAGES = {
    "missing": "O campo é obrigatório",
    "string_type": "O campo precisa ser um texto",
    "string_too_short": "O campo precisa ter pelo menos {min_length} caractere(s)",
    "string_too_long": "O campo pode ter no máximo {max_length} caracteres",
    "bool_type": "O campo precisa ser verdadeiro ou falso",
    "bool_parsing": "O campo precisa ser verdadeiro ou falso",
    "uuid_type": "O campo precisa ser um UUID válido",
    "uuid_parsing": "O campo precisa ser um UUID válido",
    "model_type": "O corpo da requisição precisa ser um objeto JSON",
    "model_attributes_type": "O corpo da requisição precisa ser um objeto JSON",
    "json_invalid": "O corpo da requisição não é um JSON válido",
    "value_error": "O campo contém um valor inválido",
}


@dataclass
class ValidationResult(Generic[ModelT]):
    is_valid: bool
    value: ModelT | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts)


def _message(error: dict[str, Any]) -> str:
    template = ERROR_MESSAGES.get(error.get("type"))
    if template is None:
        return error.get("msg", "Valor inválido")
    return template.format(**(error.get("ctx") or {}))


def errors_from_pydantic(errors: Iterable[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error dicts by field name, keeping their order."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        name = _field_name(error.get("loc", ()))
        grouped.setdefault(name, []).append(_message(error))
    return grouped


def try_validate(
    schema: type[ModelT],
    payload: Any,
    context: dict[str, Any] | None = None,
) -> ValidationResult[ModelT]:
    """Validate payload against schema without raising. `context` reaches the schema's validators."""
    try:
        value = schema.model_validate(payload, context=context)
    except ValidationError as e:
        return ValidationResult(is_valid=False, errors=errors_from_pydantic(e.errors()))
    return ValidationResult(is_valid=True, value=value)


def validate_or_raise(
    schema: type[ModelT],
    payload: Any,
    context: dict[str, Any] | None = None,
) -> ModelT:
    """Validate payload against schema, raising ValidationFailedError on any violation."""
    result = try_validate(schema, payload, context)
    if not result.is_valid:
        raise ValidationFailedError(result.errors)
    return result.value
