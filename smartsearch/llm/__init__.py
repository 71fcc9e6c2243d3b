"""LLM access package.

Module split:
    - `provider_config`: endpoints, models, limits, fallback credentials.
    - `client`: one summarization client per provider.
    - `service`: model-to-provider dispatch with in-band failure text.
"""
