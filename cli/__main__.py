"""Entry point for monstruo CLI client."""

import argparse
import sys

from cli.api_client import MonstruoAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Monstruo - Spanish word battle')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument(
        '--confidence',
        type=float,
        default=1.0,
        help='Recognizer confidence sent with typed words, 0-1 (default: 1.0)'
    )
    parser.add_argument(
        '--practice',
        action='store_true',
        default=None,
        help='Practice mode: misses cost no HP'
    )
    args = parser.parse_args()

    client = MonstruoAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client, confidence=args.confidence, practice=args.practice)

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\n¡Adiós!')
        sys.exit(0)


if __name__ == '__main__':
    main()
