#!/usr/bin/env python3
"""Run the feedback pipeline for a PR locally.

Usage: python scripts/run_review.py <installation_id> <owner> <repo> <pr_number>
"""
import asyncio
import sys
from dotenv import load_dotenv

load_dotenv()

from src.services.reviewer.service import handle_pull_request_event

async def main(installation_id: int, owner: str, repo: str, pr_number: int):
    payload = {
        "action": "opened",
        "installation": {"id": installation_id},
        "repository": {"name": repo, "owner": {"login": owner}},
        "pull_request": {"number": pr_number},
    }
    result = await handle_pull_request_event(payload)
    print(f"Review result: {result}")

if __name__ == "__main__":
    if len(sys.argv) != 5:
        sys.exit(__doc__)
    asyncio.run(main(int(sys.argv[1]), sys.argv[2], sys.argv[3], int(sys.argv[4])))
