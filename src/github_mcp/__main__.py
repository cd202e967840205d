"""Allow ``python -m github_mcp``."""

import sys

from github_mcp.main import main

sys.exit(main())
