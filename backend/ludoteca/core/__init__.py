"""Infraestrutura transversal: configuração, banco, cache, segurança e logging."""
