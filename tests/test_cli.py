"""Tests for the terminal front end of the feed."""

import io

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from api_client import ApiClient
from cli import COLOR_RED, render, run
from fakes import build_stub_app
from feed import Feed


class NullApi:
    async def get_messages(self):
        return []

    async def create_message(self, content):
        raise AssertionError("not called")


def test_render_lists_messages_and_counter() -> None:
    feed = Feed(NullApi())
    feed.messages = [{"id": "1", "content": "hello feed", "createdAt": 1_700_000_000_000}]
    feed.draft = "abc"

    output = render(feed)

    assert "277 characters remaining" in output
    assert "hello feed" in output
    assert COLOR_RED not in output


def test_render_flags_over_limit_and_error() -> None:
    feed = Feed(NullApi())
    feed.draft = "a" * 290
    feed.error = "Something went wrong. Please try again later."

    output = render(feed)

    assert f"{COLOR_RED}-10 characters remaining" in output
    assert "Something went wrong" in output


@pytest_asyncio.fixture
async def base_url():
    server = TestServer(build_stub_app())
    await server.start_server()
    yield f"http://{server.host}:{server.port}"
    await server.close()


async def fetch_contents(base_url: str) -> list[str]:
    async with ApiClient(base_url) as api:
        return [m["content"] for m in await api.get_messages()]


@pytest.mark.asyncio
async def test_run_posts_drafts_until_quit(base_url, monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("hello\n/refresh\n/quit\nnever sent\n"))

    await run(base_url)

    assert await fetch_contents(base_url) == ["hello", "existing"]
    output = capsys.readouterr().out
    assert "existing" in output
    assert "hello" in output
    assert "280 characters remaining" in output


@pytest.mark.asyncio
async def test_run_stops_at_end_of_input(base_url, monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    await run(base_url)

    assert await fetch_contents(base_url) == ["existing"]
    assert "existing" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_shows_over_limit_draft_and_keeps_it(base_url, monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("a" * 281 + "\n"))

    await run(base_url)

    assert await fetch_contents(base_url) == ["existing"]
    output = capsys.readouterr().out
    assert f"{COLOR_RED}-1 characters remaining" in output
    assert "Message content must be 280 characters or less" in output
