"""Allow ``python -m chain_reaction``."""

import sys

from chain_reaction.app import main

sys.exit(main())
