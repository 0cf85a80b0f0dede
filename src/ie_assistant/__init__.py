"""
Innovation Engine assistant: a terminal session that turns questions into executable documents.
"""

__version__ = "0.1.0"
