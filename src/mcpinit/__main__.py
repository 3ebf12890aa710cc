# Allow running as python -m mcpinit
import sys

from mcpinit.cli import main

sys.exit(main())
