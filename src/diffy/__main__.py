#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffy/__main__.py
"""Run the diffy command line with ``python -m diffy``.

Equivalent to the ``diffy`` console script; the end-to-end tests use this
form so they run against the interpreter executing the test suite.
"""

import sys

from diffy.cli import main

if __name__ == "__main__":
    sys.exit(main())
