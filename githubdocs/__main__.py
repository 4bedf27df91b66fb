"""Module entrypoint for ``python -m githubdocs``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and generation happen in ``githubdocs.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
