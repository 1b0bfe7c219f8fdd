#!/usr/bin/env python3
"""
PAMGuide - Einstiegspunkt

Kalibrierte Spektral- und Breitbandpegel von Unterwasser- und
Luftschallaufnahmen.

Verwendung:
    python main.py [-c config.toml] [-i audio_file_or_directory]

Beispiel:
    python main.py -c config.toml -i recordings/
"""

import sys


def main():
    """Start the PAMGuide analysis."""
    # Check Python version
    if sys.version_info < (3, 11):
        print("Error: Python 3.11 or higher is required.")
        print(f"Current version: {sys.version}")
        sys.exit(1)

    from pamguide.cli import main as cli_main

    sys.exit(cli_main())


if __name__ == "__main__":
    main()
