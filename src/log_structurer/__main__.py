"""Module entrypoint.

Allows:
    python -m log_structurer
"""

from __future__ import annotations

from log_structurer.cli import main

if __name__ == "__main__":
    main()
