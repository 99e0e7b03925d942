#!/usr/bin/env python3
"""
Tactile Browser - 탭 브라우저 (SDL + Skia)
사용법: python main.py [URL] [--capacity N] [--layout-ceiling N]
                       [--log-level LEVEL] [--trace FILE] [--random-user-agent]
예시: python main.py https://example.com
"""
import argparse
import logging

from tactile_browser.common.constants import LAYOUT_CEILING, TAB_CAPACITY, USER_AGENT
from tactile_browser.networking import random_user_agent
from tactile_browser.profiling import Tracer

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Minimal tabbed web-page viewer")
    parser.add_argument("url", nargs="?", help="Page to open in the first tab")
    parser.add_argument("--capacity", type=int, default=TAB_CAPACITY, help="Maximum number of tabs")
    parser.add_argument("--layout-ceiling", type=float, default=LAYOUT_CEILING,
                        help="Stop laying out blocks once the page is this tall")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    parser.add_argument("--trace", metavar="FILE", help="Write a Chrome trace (chrome://tracing) to FILE")
    parser.add_argument("--random-user-agent", action="store_true",
                        help="Send a random real-browser User-Agent instead of TactileBrowser/0.1")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )

    if args.capacity < 1:
        raise SystemExit("--capacity must be at least 1")
    if args.trace:
        Tracer.get().enable(args.trace)

    user_agent = random_user_agent() if args.random_user_agent else USER_AGENT
    logger.info("User-Agent: %s", user_agent)

    # SDL 초기화는 인자 검사 후에
    from tactile_browser.core import Browser

    browser = Browser(capacity=args.capacity, layout_ceiling=args.layout_ceiling, user_agent=user_agent)
    if args.url:
        browser.navigate(args.url)
    browser.run()


if __name__ == "__main__":
    main()
