"""Allow ``python -m digiauth``."""

from digiauth.cli import main

main()
