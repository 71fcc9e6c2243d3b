"""Core orchestration package.

Composition:
    - `engine`: per-request control flow (`SearchOrchestrator`).
    - `credentials`: request/environment key resolution.
    - `schemas`: request/response data contracts.
    - `errors`: exception taxonomy and propagation policy.
"""
