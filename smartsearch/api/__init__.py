"""Interface adapters.

Exports entrypoint modules for the FastAPI HTTP service (`http_api`) and the
terminal client (`cli`).
"""
