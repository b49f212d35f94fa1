"""Escala de Plantões package.

This package is organized by feature modules (plantoes, users, ...)
with a thin Flask controller layer and service/repository layers.
"""
