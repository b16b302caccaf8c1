"""Exceções customizadas da Ludoteca API.

Define hierarquia de exceções específicas do domínio para
tratamento consistente de erros em toda a aplicação.
"""

from typing import Any, Dict, List, Optional


class LudotecaException(Exception):
    """Exceção base da Ludoteca API.

    Todas as exceções customizadas devem herdar desta classe.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ludoteca_error",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class Violation(dict):
    """Uma restrição violada: campo, regra e mensagem."""

    def __init__(self, field: str, rule: str, message: str):
        super().__init__(field=field, rule=rule, message=message)

    @property
    def field(self) -> str:
        return self["field"]

    @property
    def rule(self) -> str:
        return self["rule"]


class ValidationError(LudotecaException):
    """Erro de validação de dados.

    Carrega a lista estruturada de violações (campo + regra) que
    é devolvida ao cliente com status 400.
    """

    def __init__(
        self,
        violations: List[Violation],
        message: str = "Dados inválidos",
    ):
        self.violations = list(violations)
        super().__init__(
            message=message,
            error_code="validation_error",
            status_code=400,
            details={"violations": self.violations}
        )


class DatabaseError(LudotecaException):
    """Erro relacionado ao banco de dados."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        if table:
            error_details["table"] = table

        super().__init__(
            message=message,
            error_code="database_error",
            status_code=500,
            details=error_details
        )


class CacheError(LudotecaException):
    """Erro no backend de cache (ex: Redis indisponível)."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            error_code="cache_error",
            status_code=500,
            details=details
        )


class AuthenticationError(LudotecaException):
    """Erro de autenticação."""

    def __init__(self, message: str = "Credenciais inválidas"):
        super().__init__(
            message=message,
            error_code="authentication_error",
            status_code=401
        )


class NotFoundError(LudotecaException):
    """Erro quando recurso não é encontrado."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code="not_found",
            status_code=404,
            details=details
        )


class ConflictError(LudotecaException):
    """Erro de conflito (registro referenciado, chave duplicada, etc.)."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code="conflict_error",
            status_code=409,
            details=details
        )
