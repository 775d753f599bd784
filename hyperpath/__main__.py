"""Module entrypoint for ``python -m hyperpath``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and stream setup happen in ``hyperpath.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
