"""Example: news agency publishing staggered sports and politics updates (in-process)."""

from dotenv import load_dotenv
load_dotenv()

import asyncio

from topicwire.config import load_settings
from topicwire.newsdesk import run_news_agency


def main() -> None:
    settings = load_settings()
    asyncio.run(run_news_agency(settings))


if __name__ == "__main__":
    main()
