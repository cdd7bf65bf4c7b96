"""
AcadGPT - An academic assistant grounded in a shared library folder.

This package provides:
- A library of downloadable files plus marksheet/assignment spreadsheets
- PDF and OCR ingestion of uploaded documents
- SGPA calculation from uploaded marksheets
- Textbook-grounded question answering with Ollama
- CLI and Web interfaces
"""

__version__ = "0.1.0"
