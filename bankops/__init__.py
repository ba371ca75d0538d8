"""
Core package for the bank operations dashboard.

Submodules provide the role-based permission model, record normalisation,
the executive metrics engine, and user interface rendering helpers that are
orchestrated by the top-level `app.py`.
"""
