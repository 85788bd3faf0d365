"""
Core domain logic: retrieval decisions, citation extraction, prompt
assembly, domain events and the exception hierarchy.
"""
