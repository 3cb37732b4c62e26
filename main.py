"""CLI entry-point that registers this host with the development push backend."""
from __future__ import annotations

import argparse
import sys

from pushclient.core.config import get_settings
from pushclient.core.logging import configure_logging
from pushclient.services.push_service import PushService


def main(argv: list[str] | None = None) -> int:
    """Run one development registration cycle and print the issued token."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--debug", action="store_true", help="Log every push event")
    args = parser.parse_args(argv)

    settings = get_settings()
    logger = configure_logging(settings, debug=args.debug)
    identity = settings.identity.model_copy(update={"dev_push": True})

    push = PushService(
        {
            "debug": args.debug,
            "onRegister": lambda data: logger.info("Registered %s", data["registrationId"]),
        },
        identity=identity,
    )
    if not push.valid or not push.register() or push.token is None:
        logger.error("Development registration failed")
        return 1
    print(push.token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
