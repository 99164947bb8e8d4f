"""Admin Console Package — analytics and query core for the staging admin dashboard.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
