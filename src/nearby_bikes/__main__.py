"""Allow ``python -m nearby_bikes``."""

from nearby_bikes.cli import cli_main

cli_main()
