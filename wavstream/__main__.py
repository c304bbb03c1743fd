"""Allow ``python -m wavstream``."""

import sys

from wavstream.main import main

sys.exit(main())
