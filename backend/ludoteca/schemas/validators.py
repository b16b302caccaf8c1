"""Restrições de entidade aplicadas antes de persistir.

Cada modelo declara, por campo, as regras que o registro completo
precisa cumprir. As regras rodam depois do merge do payload com o
registro existente, então valem para criação e atualização.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple

from email_validator import EmailNotValidError, validate_email

from ludoteca.core.exceptions import ValidationError, Violation


@dataclass(frozen=True)
class Rule:
    """Regra de validação de um campo."""
    name: str
    check: Callable[[Any], bool]
    message: str


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def not_blank(message: str = "Este valor não deve estar em branco.") -> Rule:
    return Rule("not_blank", lambda v: not _is_blank(v), message)


def not_null(message: str = "Este valor não deve ser nulo.") -> Rule:
    return Rule("not_null", lambda v: v is not None, message)


def max_length(limit: int) -> Rule:
    return Rule(
        "max_length",
        lambda v: v is None or len(str(v)) <= limit,
        f"Este valor é muito longo. Deve ter {limit} caracteres ou menos.",
    )


def _valid_email(value: Any) -> bool:
    if _is_blank(value):
        return True
    try:
        validate_email(str(value), check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def email() -> Rule:
    return Rule("email", _valid_email, "Este valor não é um endereço de email válido.")


# (campo JSON, atributo do modelo, regras)
Constraints = Sequence[Tuple[str, str, Sequence[Rule]]]


CATEGORY_CONSTRAINTS: Constraints = (
    ("name", "name", (not_blank(), max_length(255))),
)

EDITOR_CONSTRAINTS: Constraints = (
    ("name", "name", (not_blank(), max_length(255))),
    ("country", "country", (max_length(255),)),
)

VIDEO_GAME_CONSTRAINTS: Constraints = (
    ("title", "title", (not_blank(), max_length(255))),
    ("releaseDate", "release_date", (not_blank(),)),
    ("description", "description", (not_blank(),)),
    ("category", "category", (not_null(),)),
    ("editor", "editor", (not_null(),)),
)

USER_CONSTRAINTS: Constraints = (
    ("email", "email", (not_blank(), email(), max_length(180))),
)


def collect_violations(record: Any, constraints: Constraints) -> List[Violation]:
    """Aplica as regras ao registro e retorna todas as violações."""
    violations: List[Violation] = []
    for field, attribute, rules in constraints:
        value = getattr(record, attribute, None)
        for rule in rules:
            if not rule.check(value):
                violations.append(Violation(field=field, rule=rule.name, message=rule.message))
    return violations


def validate_record(record: Any, constraints: Constraints) -> None:
    """Valida o registro e lança ValidationError se houver violações."""
    violations = collect_violations(record, constraints)
    if violations:
        raise ValidationError(violations)


def merge(record: Any, changes: Dict[str, Any]) -> Any:
    """Aplica sobre o registro apenas os campos presentes em ``changes``.

    Campos ausentes mantêm o valor anterior.
    """
    for attribute, value in changes.items():
        setattr(record, attribute, value)
    return record
