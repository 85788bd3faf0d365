"""
Policy chat: retrieval-augmented Q&A over insurance policy documents.
"""
