"""Core: configuration, domain models and orchestration services.

No HTTP client or subprocess code lives here.
"""
