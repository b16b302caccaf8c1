"""Repositório de usuários."""

from typing import Optional

from ludoteca.models.user import User
from ludoteca.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User

    async def get_by_email(self, email: str) -> Optional[User]:
        """Busca usuário pelo email (identificador de login)."""
        return await self.find_one_by(email=email.strip())
