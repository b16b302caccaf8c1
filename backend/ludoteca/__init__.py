"""Ludoteca API - catálogo de jogos, categorias e editoras.

API REST em FastAPI com SQLAlchemy async, cache por tags e
autenticação JWT.
"""

__version__ = "1.0.0"
