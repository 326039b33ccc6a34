# product_api/validators.py

"""
Request validation rules for the product routes.

Each field owns an ordered list of (predicate, message) rules. Every rule is
evaluated, so a field failing several rules contributes one error per failed
rule, and the errors keep the order in which fields and rules are declared.
Clients rely on both the messages and the error counts.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

from fastapi import Request

from .errors import RequestValidationFailed

MISSING = object()

INVALID_ID = "ID no válido"
NAME_REQUIRED = "Nombre de producto es Obligatorio"
PRICE_NOT_NUMERIC = "Valor no válido"
PRICE_NOT_POSITIVE = "Precio No válido"
PRICE_REQUIRED = "El precio del producto es Obligatorio"
AVAILABILITY_NOT_BOOLEAN = "valor para disponibilidad No válido"
INVALID_BODY = "Cuerpo de la petición no válido"

_INT_RE = re.compile(r"^[-+]?[0-9]+$")


def is_int(value: Any) -> bool:
    return isinstance(value, str) and bool(_INT_RE.match(value))


def not_empty(value: Any) -> bool:
    return value is not MISSING and value is not None and value != ""


def is_number(value: Any) -> bool:
    # bool is a subclass of int but is not a JSON number; json reads 1e400 as inf
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def is_positive(value: Any) -> bool:
    # Loose comparison: true counts as 1, numeric strings are coerced
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, str):
        try:
            return float(value) > 0
        except ValueError:
            return False
    return False


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def json_safe(value: Any) -> Any:
    """Echoable copy of a received value; non-finite floats become null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, list):
        return [json_safe(item) for item in value]
    if isinstance(value, dict):
        return {key: json_safe(item) for key, item in value.items()}
    return value


@dataclass(frozen=True)
class Rule:
    check: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class FieldRules:
    """Rules for one field read from `location` ("params" or "body")."""

    field: str
    location: str
    rules: Sequence[Rule]
    key: str = ""

    def errors(self, source: Dict[str, Any]) -> List[Dict[str, Any]]:
        value = source.get(self.key or self.field, MISSING)
        found = []
        for rule in self.rules:
            if rule.check(value):
                continue
            error = {
                "type": "field",
                "msg": rule.message,
                "path": self.field,
                "location": self.location,
            }
            if value is not MISSING:
                error["value"] = json_safe(value)
            found.append(error)
        return found


ID_RULES = FieldRules("id", "params", [Rule(is_int, INVALID_ID)], key="product_id")

NAME_RULES = FieldRules("name", "body", [Rule(not_empty, NAME_REQUIRED)])

PRICE_RULES = FieldRules(
    "price",
    "body",
    [
        Rule(is_number, PRICE_NOT_NUMERIC),
        Rule(is_positive, PRICE_NOT_POSITIVE),
        Rule(not_empty, PRICE_REQUIRED),
    ],
)

AVAILABILITY_RULES = FieldRules(
    "availability", "body", [Rule(is_boolean, AVAILABILITY_NOT_BOOLEAN)]
)

CREATE_RULES = [NAME_RULES, PRICE_RULES]
UPDATE_RULES = [ID_RULES, NAME_RULES, PRICE_RULES, AVAILABILITY_RULES]
BY_ID_RULES = [ID_RULES]


def collect_errors(
    field_rules: Sequence[FieldRules],
    params: Dict[str, Any],
    body: Dict[str, Any],
) -> List[Dict[str, Any]]:
    """Run every rule of every field and return the failures in order."""
    errors = []
    for rules in field_rules:
        source = params if rules.location == "params" else body
        errors.extend(rules.errors(source))
    return errors


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    An empty body or a JSON value that is not an object reads as `{}`;
    malformed JSON is rejected as a validation failure.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationFailed(
            [{"type": "field", "msg": INVALID_BODY, "path": "", "location": "body"}]
        )
    return body if isinstance(body, dict) else {}


def validate_request(field_rules: Sequence[FieldRules]):
    """
    Build a FastAPI dependency that validates path params and body against
    `field_rules`. It raises `RequestValidationFailed` when anything fails and
    otherwise returns the parsed body untouched.
    """
    reads_body = any(rules.location == "body" for rules in field_rules)

    async def dependency(request: Request) -> Dict[str, Any]:
        body = await read_json_body(request) if reads_body else {}
        errors = collect_errors(field_rules, request.path_params, body)
        if errors:
            raise RequestValidationFailed(errors)
        return body

    return dependency
