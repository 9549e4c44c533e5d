"""Entry point wrapper for ``python -m scale_degree``.

Forwards execution to :func:`scale_degree.main` so ``python -m scale_degree``
and the installed ``scale-degree`` console script behave identically.

Example
-------
::

    python -m scale_degree chord "5 9 3 7" D3
"""

from . import main

if __name__ == "__main__":
    main()
