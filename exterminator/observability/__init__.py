"""
Observability helpers (structured logging).
"""
