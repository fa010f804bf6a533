"""
Allow ``python -m webdemos`` as an alias of the ``webdemos`` command.
"""

import sys

from .cli import main

sys.exit(main())
