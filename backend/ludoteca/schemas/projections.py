"""Projeções de campos por grupo de serialização.

Cada grupo (``category:read``, ``game:write``...) é uma lista ordenada
de campos. Grupos ``read`` definem o que sai em toda resposta; grupos
``write`` definem o que é aceito na entrada. Campos internos como
a senha só aparecem em grupos de escrita.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ProjectedField:
    """Campo de uma projeção.

    Attributes:
        name: Nome do campo no JSON
        attribute: Atributo do modelo (ou método sem argumentos)
        group: Grupo usado para projetar o objeto relacionado
    """
    name: str
    attribute: str
    group: Optional[str] = None


def _fields(*entries: Any) -> Tuple[ProjectedField, ...]:
    result = []
    for entry in entries:
        if isinstance(entry, ProjectedField):
            result.append(entry)
        else:
            result.append(ProjectedField(name=entry, attribute=entry))
    return tuple(result)


SERIALIZATION_GROUPS: Dict[str, Tuple[ProjectedField, ...]] = {
    "category:read": _fields("id", "name"),
    "category:write": _fields("name"),
    "editor:read": _fields("id", "name", "country"),
    "editor:write": _fields("name", "country"),
    "game:read": _fields(
        "id",
        "title",
        ProjectedField("releaseDate", "release_date"),
        "description",
        ProjectedField("category", "category", group="category:read"),
        ProjectedField("editor", "editor", group="editor:read"),
    ),
    "game:write": _fields(
        "title",
        ProjectedField("releaseDate", "release_date"),
        "description",
        "category",
        "editor",
    ),
    "user:read": _fields("id", "email", ProjectedField("roles", "get_roles")),
    "user:write": _fields("email", "password"),
}


def get_group(group: str) -> Tuple[ProjectedField, ...]:
    try:
        return SERIALIZATION_GROUPS[group]
    except KeyError:
        raise KeyError(f"Grupo de serialização desconhecido: {group}") from None


def field_names(group: str) -> List[str]:
    """Nomes JSON dos campos do grupo, na ordem declarada."""
    return [f.name for f in get_group(group)]


def _normalize(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def project(record: Any, group: str) -> Optional[Dict[str, Any]]:
    """Projeta um registro no grupo informado.

    Transformação pura: lê atributos do registro e devolve um dict
    apenas com os campos do grupo, com relacionamentos projetados
    no grupo declarado para eles.
    """
    if record is None:
        return None

    output: Dict[str, Any] = {}
    for entry in get_group(group):
        value = getattr(record, entry.attribute, None)
        if callable(value):
            value = value()
        if entry.group is not None:
            value = project(value, entry.group)
        output[entry.name] = _normalize(value)
    return output


def project_many(records: List[Any], group: str) -> List[Dict[str, Any]]:
    return [project(record, group) for record in records]


def restrict_to_group(payload: Mapping[str, Any], group: str) -> Dict[str, Any]:
    """Mantém do payload apenas as chaves aceitas pelo grupo de escrita."""
    allowed = set(field_names(group))
    return {key: value for key, value in payload.items() if key in allowed}
