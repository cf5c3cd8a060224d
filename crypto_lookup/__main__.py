"""Run as: python -m crypto_lookup <command> [args...]"""

import sys

from .cli.main import main

sys.exit(main())
