"""Allow ``python -m router_mock``."""

import sys

from .cli import main

sys.exit(main())
