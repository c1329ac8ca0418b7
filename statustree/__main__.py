"""Module entrypoint for ``python -m statustree``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and walking happen in ``statustree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
