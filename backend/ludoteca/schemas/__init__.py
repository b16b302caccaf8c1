"""Schemas Pydantic, projeções por grupo e validações de entidade."""
