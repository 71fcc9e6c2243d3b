"""Prompting package.

Deterministic prompt-construction helpers for summarization. It does not
perform retrieval, provider selection, or model invocation.
"""
