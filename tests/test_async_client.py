"""Tests for the asyncio Firecrawl client."""

import asyncio
import json
import unittest

import httpx

from firecrawl_client import (
    AsyncFirecrawl,
    EncodingError,
    JobStatus,
    JobTimeoutError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ResponseTooLargeError,
)


def make_client(handler, **kwargs):
    transport = httpx.MockTransport(handler)
    return AsyncFirecrawl(
        api_key="test-key",
        http_client=httpx.AsyncClient(transport=transport),
        **kwargs,
    )


def scrape_handler(request):
    url = json.loads(request.content)["url"]
    return httpx.Response(200, json={
        "success": True,
        "data": {"markdown": f"content of {url}", "metadata": {"sourceURL": url}},
    })


class TestAsyncFirecrawl(unittest.IsolatedAsyncioTestCase):

    async def test_scrape(self):
        async with make_client(scrape_handler) as client:
            result = await client.scrape("https://example.com")
        self.assertEqual(result.data.markdown, "content of https://example.com")

    async def test_gathered_calls_keep_their_own_results(self):
        client = make_client(scrape_handler)
        urls = [f"https://example.com/{i}" for i in range(20)]

        results = await asyncio.gather(*(client.scrape(url) for url in urls))

        for url, result in zip(urls, results):
            self.assertEqual(result.data.metadata.source_url, url)
        await client.aclose()

    async def test_search_sends_defaults(self):
        sent = []

        def handler(request):
            sent.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "data": {"news": []}})

        client = make_client(handler)
        await client.search("firecrawl", limit=2, formats=["html"])
        self.assertEqual(sent[0], {
            "query": "firecrawl",
            "limit": 2,
            "sources": [{"type": "web"}],
            "scrapeOptions": {"formats": ["html"]},
        })

    async def test_status_errors_are_classified(self):
        client = make_client(lambda request: httpx.Response(429, json={"success": False}))
        with self.assertRaises(RateLimitError) as ctx:
            await client.get_crawl_status("job-1")
        self.assertEqual(ctx.exception.message, "Rate limit exceeded")

        client = make_client(lambda request: httpx.Response(404, text="not json"))
        with self.assertRaises(NotFoundError) as ctx:
            await client.get_extract_status("job-1")
        self.assertEqual(ctx.exception.message, "Resource not found")

    async def test_invalid_options_send_nothing(self):
        sent = []
        client = make_client(lambda request: sent.append(request))
        with self.assertRaises(EncodingError):
            await client.map("https://example.com", limit="many")
        self.assertEqual(sent, [])

    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("DNS failure", request=request)

        client = make_client(handler)
        with self.assertRaises(NetworkError):
            await client.get_queue_status()

    async def test_streamed_body_over_cap(self):
        async def chunks():
            for _ in range(4):
                yield b"x" * 32

        client = make_client(
            lambda request: httpx.Response(200, content=chunks()),
            max_response_bytes=64,
        )
        with self.assertRaises(ResponseTooLargeError):
            await client.get_queue_status()

    async def test_batch_scrape_waits_for_completion(self):
        checks = []

        def handler(request):
            if request.method == "POST":
                return httpx.Response(200, json={"success": True, "id": "batch-1"})
            checks.append(request.url.path)
            status = "completed" if len(checks) >= 3 else "scraping"
            return httpx.Response(200, json={"status": status, "completed": len(checks)})

        client = make_client(handler, poll_interval=0.01)
        status = await client.batch_scrape(["https://a.example", "https://b.example"])
        self.assertEqual(status.status, JobStatus.COMPLETED)
        self.assertEqual(checks, ["/v2/batch/scrape/batch-1"] * 3)

    async def test_wait_times_out(self):
        client = make_client(lambda request: httpx.Response(200, json={"status": "scraping"}))
        with self.assertRaises(JobTimeoutError) as ctx:
            await client.wait_for_crawl_completion("job-1", poll_interval=0.01, timeout=0.05)
        self.assertEqual(ctx.exception.job_id, "job-1")

    async def test_wait_can_be_cancelled(self):
        client = make_client(lambda request: httpx.Response(200, json={"status": "scraping"}))
        with self.assertRaises(asyncio.TimeoutError):
            await asyncio.wait_for(
                client.wait_for_crawl_completion("job-1", poll_interval=10, timeout=60),
                timeout=0.1,
            )

    async def test_aclose_is_idempotent_and_blocks_later_calls(self):
        client = AsyncFirecrawl(api_key="test-key")
        await client.aclose()
        await client.aclose()
        self.assertTrue(client._client.is_closed)
        with self.assertRaises(NetworkError):
            await client.scrape("https://example.com")

    async def test_external_client_left_open(self):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(scrape_handler))
        async with AsyncFirecrawl(api_key="test-key", http_client=http_client) as client:
            await client.scrape("https://example.com")
        self.assertFalse(http_client.is_closed)
        await http_client.aclose()


if __name__ == '__main__':
    unittest.main()
