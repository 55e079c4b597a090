"""``python -m moded``."""

import sys

from moded.adapters.textual.app import main

sys.exit(main())
