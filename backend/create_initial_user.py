#!/usr/bin/env python3
"""Script para criar o administrador inicial.

Sem um usuário com ROLE_ADMIN ninguém consegue acessar as rotas
de escrita nem o cadastro de usuários.

Uso:
    python create_initial_user.py --email admin@ludoteca.com --password admin123

Email e senha também podem vir de ADMIN_EMAIL e ADMIN_PASSWORD.
"""

import argparse
import asyncio
import os
import sys

from loguru import logger

from ludoteca.core.database import AsyncSessionLocal, create_tables, engine
from ludoteca.core.security import get_password_hash
from ludoteca.models import User, UserRole
from ludoteca.repositories import UserRepository


async def create_initial_user(email: str, password: str) -> bool:
    """Cria o administrador se ainda não existir usuário com o email.

    Returns:
        True se o usuário foi criado
    """
    await create_tables()

    async with AsyncSessionLocal() as db:
        repository = UserRepository(db)
        existing_user = await repository.get_by_email(email)
        if existing_user:
            logger.info(f"Usuário já existe: {existing_user.email} (id={existing_user.id})")
            return False

        user = User(
            email=email,
            roles=[UserRole.ADMIN.value],
            password=get_password_hash(password),
        )
        await repository.save(user)

    logger.info(f"✅ Administrador criado: {email} (id={user.id}, roles={user.get_roles()})")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Cria o administrador inicial da Ludoteca API")
    parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL", "admin@ludoteca.com"))
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    args = parser.parse_args()

    if not args.password:
        parser.error("informe --password ou defina ADMIN_PASSWORD")

    async def run() -> None:
        try:
            await create_initial_user(args.email, args.password)
        finally:
            await engine.dispose()

    asyncio.run(run())
    return 0


if __name__ == "__main__":
    sys.exit(main())
