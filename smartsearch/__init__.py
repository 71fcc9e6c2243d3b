"""SmartSearch: web search with AI-generated synthesis.

Subpackages:
    - `core`: request orchestration, credentials, data contracts, errors.
    - `retrieval`: Exa search client and result normalization.
    - `prompting`: summarization prompt assembly.
    - `llm`: provider configuration and summarization clients.
    - `api`: HTTP and CLI adapters.
"""
