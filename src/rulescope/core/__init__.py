"""Núcleo de catálogo, índice de facetas y motor de consultas.

English: Catalog, facet index and query engine core.
"""
