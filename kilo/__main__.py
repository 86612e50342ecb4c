"""Module entrypoint for ``python -m kilo``.

Module-mode execution behaves exactly like the ``kilo`` console script.
"""

from .cli import main


if __name__ == "__main__":
    main()
