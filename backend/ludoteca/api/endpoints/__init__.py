"""Endpoints da API, um módulo por recurso."""
