"""
EntropyForge Module Entry Point
================================

Allows running the EntropyForge CLI via: python -m entropyforge
"""

from entropyforge.cli import main

if __name__ == "__main__":
    main()
