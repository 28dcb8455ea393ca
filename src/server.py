"""Protean Engine runner for the storefront domain.

Processes events asynchronously when the domain runs with
``event_processing = "async"`` (the production overlay): order
notifications are published by the Engine rather than inside the request.

Usage:
    python src/server.py
    python src/server.py --test-mode   # Exit once queued work is drained
"""

import argparse
import asyncio

from protean.server.engine import Engine


def _get_domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


async def run(test_mode=False):
    engine = Engine(_get_domain(), test_mode=test_mode)
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages and exit",
    )
    args = parser.parse_args()

    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
