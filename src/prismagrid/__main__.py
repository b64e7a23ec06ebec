"""
Allow `python -m prismagrid`.
"""

from .main import main

if __name__ == "__main__":
    main()
