"""
Core domain models, mathematical primitives, and contracts.

This module contains the foundational building blocks of the matrix
expression engine: the Matrix entity, the matrix algebra primitives with
step narration, and the JSON contracts consumed by external renderers.
"""
