"""Data-access and utility layer for a table-driven ERP back end: query, DDL, numbering, ordering, tree and token helpers."""

__version__ = "0.1.0"