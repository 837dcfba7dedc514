"""Entry point of ``python -m slidemerge``."""
import sys

from slidemerge.cli import main

sys.exit(main())
