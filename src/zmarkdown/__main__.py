#!/usr/bin/env python3
"""Run the markdown renderer with ``python -m zmarkdown``.

Arguments are the same as for the ``zmarkdown`` console script, e.g.::

    python -m zmarkdown article.md --target latex --document -o article.tex
"""

import sys

from zmarkdown.cli import main

if __name__ == "__main__":
    sys.exit(main())
