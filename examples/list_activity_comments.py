#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from pagegather import HTTPClient, HTTPPageFetcher, PageDescriptor, PagingHandler


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch a page of activity comments, or all of them")
    p.add_argument("activity_id", type=int)
    p.add_argument("page", nargs="?", type=int, default=1)
    p.add_argument("page_size", nargs="?", type=int, default=30)
    p.add_argument("--all", action="store_true", help="list every comment (uses a lot of quota)")
    p.add_argument("--base-url", default="https://www.strava.com/api/v3")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO)

    token = os.environ["STRAVA_ACCESS_TOKEN"]
    handler = PagingHandler()
    async with HTTPClient(
        base_url=args.base_url, headers={"Authorization": f"Bearer {token}"}
    ) as client:
        fetcher = HTTPPageFetcher(client, f"/activities/{args.activity_id}/comments")
        if args.all:
            comments = await handler.handle_list_all(fetcher)
        else:
            comments = await handler.handle_paging(
                PageDescriptor(page_number=args.page, page_size=args.page_size), fetcher
            )

    if comments is None:
        print(f"Activity {args.activity_id} does not exist")
        return
    print(f"Comments on activity {args.activity_id}: showing {len(comments)}")
    for c in comments:
        print(f"{c.get('created_at', ''):25} | {c.get('text', '')}")


if __name__ == "__main__":
    asyncio.run(main())
