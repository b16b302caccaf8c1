"""Schemas de autenticação."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credenciais enviadas ao ``/login_check``."""
    email: str = Field(..., description="Email do usuário")
    password: str = Field(..., description="Senha do usuário")


class Token(BaseModel):
    """Resposta de autenticação bem-sucedida."""
    token: str
