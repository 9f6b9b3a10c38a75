"""Service layer — the decode engine and the result-returning facade.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
