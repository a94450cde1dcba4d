"""Entry point for ``python -m slopes``."""

import sys

from slopes.cli import main


sys.exit(main())
