"""
Interfaces module - User-facing interfaces for AcadGPT.

This module provides:
1. CLI interface for command-line interaction
2. Web backend using FastAPI
"""
