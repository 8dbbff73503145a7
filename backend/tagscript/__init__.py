"""TagScript Application Package — transcript content analysis API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
