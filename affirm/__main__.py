"""
Entry point for running affirm as a Python module: `python -m affirm`

The console script defined in pyproject.toml calls `affirm.main:main` directly;
both paths end up in the same function.
"""

from .main import main

if __name__ == "__main__":
    main()
