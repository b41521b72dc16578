import asyncio
import os
import sys
from datetime import datetime
from dotenv import load_dotenv
from api_client import ApiClient
from feed import Feed

load_dotenv()

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3001")
COLOR_RESET = "\u001b[0m"
COLOR_RED = "\u001b[31m"

def format_timestamp(created_at: int) -> str:
    return datetime.fromtimestamp(created_at / 1000).strftime("%Y-%m-%d %H:%M:%S")

def render(feed: Feed) -> str:
    lines = ["Chirp", ""]
    counter = feed.counter_text
    if feed.over_limit:
        counter = f"{COLOR_RED}{counter}{COLOR_RESET}"
    lines.append(counter)
    if feed.error:
        lines.append(f"{COLOR_RED}! {feed.error}{COLOR_RESET}")
    lines.append("")
    for message in feed.messages:
        lines.append(f"[{format_timestamp(message['createdAt'])}] {message['content']}")
    return "\n".join(lines)

async def run(base_url: str = API_BASE_URL):
    async with ApiClient(base_url) as api:
        feed = Feed(api)
        await feed.load()
        print(render(feed))

        while True:
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line or line.strip() == "/quit":
                break
            if line.strip() == "/refresh":
                await feed.load()
            else:
                feed.draft = line.rstrip("\n")
                if feed.over_limit:
                    print(render(feed))
                await feed.submit()
            print(render(feed))

if __name__ == "__main__":
    asyncio.run(run())
