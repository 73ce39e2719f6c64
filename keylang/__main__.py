"""
CLI entrypoint for `python -m keylang`.
"""

from .keylangc import main

if __name__ == "__main__":
    import sys
    sys.exit(main())
