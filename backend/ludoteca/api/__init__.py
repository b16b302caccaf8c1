"""Camada HTTP da Ludoteca API."""
