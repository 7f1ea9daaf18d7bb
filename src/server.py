"""Protean Engine runner for the storefront domain.

Starts the Engine that processes events asynchronously in production
(order confirmation, verification and password reset emails).

Usage:
    python src/server.py
    python src/server.py --test-mode   # process pending messages and exit
"""

import argparse

from protean.server.engine import Engine


def _get_domain():
    import storefront.notifications  # noqa: F401  (load before init so traversal doesn't split its import cycle)
    from storefront.domain import storefront

    storefront.init()
    return storefront


def main():
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    engine = Engine(_get_domain(), test_mode=args.test_mode)
    engine.run()


if __name__ == "__main__":
    main()
