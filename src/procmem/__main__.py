"""Allow ``python -m procmem``."""

from procmem.cli import run

run()
