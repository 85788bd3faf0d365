"""
Boundary adapters: persistence, vector search and LLM providers.
"""
