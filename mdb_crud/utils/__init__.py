"""
Utility functions and helpers for MDB_CRUD.
"""

from .mongo import clean_mongo_doc, clean_mongo_docs, get_path_values

__all__ = ["clean_mongo_doc", "clean_mongo_docs", "get_path_values"]
