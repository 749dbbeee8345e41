"""Module entrypoint.

Allows:
    python -m log_obfuscator
"""

from __future__ import annotations

from log_obfuscator.server.mask_server import main

if __name__ == "__main__":
    main()
