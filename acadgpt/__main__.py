"""
Entry point for running AcadGPT as a module.

Run with:
    python -m acadgpt
"""

from acadgpt.interfaces.cli import main

if __name__ == "__main__":
    main()
