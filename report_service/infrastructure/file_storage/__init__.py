"""
File Storage Infrastructure Module

Rendering and byte storage of report artifacts.

Exports:
    - ExcelWriterService: openpyxl renderer
    - LocalObjectStore: Filesystem object store
    - AzureBlobObjectStore: Azure Blob Storage object store
"""

from .azure_blob_store import AzureBlobObjectStore, AzureBlobStoreConfig
from .excel_writer import ExcelWriterService
from .object_store import LocalObjectStore

__all__ = [
    "AzureBlobObjectStore",
    "AzureBlobStoreConfig",
    "ExcelWriterService",
    "LocalObjectStore",
]
