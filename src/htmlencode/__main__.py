"""Allow ``python -m htmlencode``."""

import sys

from htmlencode.cli import main

sys.exit(main())
