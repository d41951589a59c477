"""
Runnable script for the token ledger host.
"""

import argparse

from src.main import main


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Token ledger host")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    main(debug=args.debug)
