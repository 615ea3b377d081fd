"""Tests for the blocking Firecrawl client."""

import json
import unittest
from concurrent.futures import ThreadPoolExecutor

import httpx

from firecrawl_client import (
    BadRequestError,
    DecodingError,
    EncodingError,
    Firecrawl,
    InvalidResponseError,
    InvalidURLError,
    JobStatus,
    NetworkError,
    ResponseTooLargeError,
    ScrapeRequest,
    ScrapeResponse,
    UnauthorizedError,
    UnknownError,
)
from firecrawl_client.types import CrawlStatusResponse, ExtractJobStatus


def make_client(handler, **kwargs):
    """Client whose requests are answered by ``handler`` instead of the network."""
    transport = httpx.MockTransport(handler)
    return Firecrawl(api_key="test-key", http_client=httpx.Client(transport=transport), **kwargs)


def json_response(data, status_code=200):
    return httpx.Response(status_code, json=data)


class TestFirecrawl(unittest.TestCase):
    """Test Firecrawl client."""

    def setUp(self):
        """Set up a client that records every request it sends."""
        self.requests = []

        def handler(request):
            self.requests.append(request)
            return json_response({
                "success": True,
                "data": {
                    "markdown": "# Example Domain\n\nThis is an example.",
                    "metadata": {
                        "title": "Example Domain",
                        "sourceURL": "https://example.com",
                        "statusCode": 200,
                    },
                },
            })

        self.client = make_client(handler)

    def tearDown(self):
        self.client.close()

    def test_init(self):
        """Test client initialization."""
        client = Firecrawl(api_key="test-key")
        self.assertEqual(client.api_key, "test-key")
        self.assertEqual(client.api_url, "https://api.firecrawl.dev")
        self.assertEqual(client.timeout, 30)
        self.assertEqual(client.max_response_bytes, 10 * 1024 * 1024)
        client.close()

    def test_init_custom(self):
        """Test client with custom settings."""
        client = Firecrawl(
            api_key="custom-key",
            api_url="https://custom.api/",
            timeout=60,
        )
        self.assertEqual(client.api_key, "custom-key")
        self.assertEqual(client.api_url, "https://custom.api")
        self.assertEqual(client.timeout, 60)
        client.close()

    def test_repr_hides_api_key(self):
        self.assertNotIn("test-key", repr(self.client))

    def test_scrape_basic(self):
        """Test basic scrape."""
        result = self.client.scrape("https://example.com")

        self.assertIsInstance(result, ScrapeResponse)
        self.assertTrue(result.success)
        self.assertEqual(result.data.metadata.title, "Example Domain")
        self.assertEqual(result.data.metadata.source_url, "https://example.com")
        self.assertIn("Example Domain", result.data.markdown)

        request = self.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), "https://api.firecrawl.dev/v2/scrape")
        self.assertEqual(request.headers["Authorization"], "Bearer test-key")
        self.assertEqual(request.headers["Content-Type"], "application/json")
        self.assertTrue(request.headers["User-Agent"].startswith("firecrawl-client-python/"))
        self.assertEqual(
            json.loads(request.content),
            {"url": "https://example.com", "formats": "markdown"},
        )

    def test_scrape_with_options(self):
        """Test scrape with options."""
        self.client.scrape(
            "https://example.com",
            formats=["markdown", "html"],
            only_main_content=True,
            wait_for=2000,
            actions=[{"type": "wait", "milliseconds": 500}],
        )

        body = json.loads(self.requests[0].content)
        self.assertEqual(body["formats"], "markdown,html")
        self.assertTrue(body["onlyMainContent"])
        self.assertEqual(body["waitFor"], 2000)
        self.assertEqual(body["actions"], [{"type": "wait", "milliseconds": 500}])

    def test_scrape_with_request_model(self):
        request = ScrapeRequest(url="https://example.com", formats=["links"])
        self.client.scrape(request)
        self.assertEqual(
            json.loads(self.requests[0].content),
            {"url": "https://example.com", "formats": "links"},
        )

    def test_request_model_and_options_conflict(self):
        with self.assertRaises(EncodingError):
            self.client.scrape(ScrapeRequest(url="https://example.com"), mobile=True)
        self.assertEqual(self.requests, [])

    def test_unknown_option_is_rejected_before_sending(self):
        with self.assertRaises(EncodingError) as ctx:
            self.client.scrape("https://example.com", not_an_option=True)
        self.assertIn("not_an_option", str(ctx.exception))
        self.assertEqual(self.requests, [])

    def test_unencodable_body_is_rejected_before_sending(self):
        with self.assertRaises(EncodingError):
            self.client._request("POST", "/v2/scrape", {"value": float("nan")})
        self.assertEqual(self.requests, [])


class TestEndpoints(unittest.TestCase):
    """Each method hits the right path with the right verb."""

    def setUp(self):
        self.requests = []
        self.responses = {}

        def handler(request):
            self.requests.append(request)
            key = (request.method, request.url.path)
            return json_response(self.responses.get(key, {"success": True}))

        self.client = make_client(handler)

    def tearDown(self):
        self.client.close()

    def last(self):
        request = self.requests[-1]
        return request.method, request.url.path

    def test_crawl_endpoints(self):
        self.responses[("POST", "/v2/crawl")] = {"success": True, "id": "crawl-1", "url": "https://api"}
        self.responses[("GET", "/v2/crawl/crawl-1")] = {"status": "scraping", "total": 10, "completed": 3}
        self.responses[("DELETE", "/v2/crawl/crawl-1")] = {"status": "cancelled"}
        self.responses[("GET", "/v2/crawl/crawl-1/errors")] = {
            "errors": [{"id": "e1", "url": "https://example.com/x", "error": "timeout"}],
            "robotsBlocked": ["https://example.com/private"],
        }
        self.responses[("GET", "/v2/crawl/active")] = {
            "success": True,
            "crawls": [{"id": "crawl-1", "teamId": "team", "url": "https://example.com", "options": {}}],
        }

        started = self.client.start_crawl("https://example.com", limit=10)
        self.assertEqual(started.id, "crawl-1")
        body = json.loads(self.requests[-1].content)
        self.assertEqual(body, {
            "url": "https://example.com",
            "limit": 10,
            "scrapeOptions": {"formats": ["markdown"]},
        })

        status = self.client.get_crawl_status("crawl-1")
        self.assertEqual(status.status, JobStatus.SCRAPING)
        self.assertEqual(status.completed, 3)

        self.assertEqual(self.client.cancel_crawl("crawl-1").status, "cancelled")
        self.assertEqual(self.last(), ("DELETE", "/v2/crawl/crawl-1"))

        errors = self.client.get_crawl_errors("crawl-1")
        self.assertEqual(errors.errors[0].error, "timeout")
        self.assertEqual(errors.robots_blocked, ["https://example.com/private"])

        active = self.client.get_active_crawls()
        self.assertEqual(active.crawls[0].team_id, "team")

    def test_crawl_formats_shortcut(self):
        self.responses[("POST", "/v2/crawl")] = {"success": True, "id": "crawl-1"}
        self.client.start_crawl("https://example.com", formats=["html"])
        body = json.loads(self.requests[-1].content)
        self.assertEqual(body["scrapeOptions"], {"formats": ["html"]})

    def test_crawl_params_preview(self):
        self.responses[("POST", "/v2/crawl/params-preview")] = {
            "success": True,
            "data": {"url": "https://example.com", "includePaths": ["/blog/*"], "limit": 50},
        }
        preview = self.client.crawl_params_preview("https://example.com", "Only the blog posts")
        self.assertEqual(preview.data.include_paths, ["/blog/*"])
        self.assertEqual(
            json.loads(self.requests[-1].content),
            {"url": "https://example.com", "prompt": "Only the blog posts"},
        )

    def test_map(self):
        self.responses[("POST", "/v2/map")] = {
            "success": True,
            "links": [{"url": "https://example.com/a", "title": "A"}],
        }
        result = self.client.map("https://example.com", search="docs", limit=100)
        self.assertEqual(result.links[0].url, "https://example.com/a")
        self.assertEqual(
            json.loads(self.requests[-1].content),
            {"url": "https://example.com", "search": "docs", "limit": 100},
        )

    def test_search_defaults(self):
        self.responses[("POST", "/v2/search")] = {
            "success": True,
            "data": {"web": [{"title": "Python", "url": "https://python.org"}]},
        }
        result = self.client.search("python web scraping")
        self.assertEqual(result.data.web[0].url, "https://python.org")
        self.assertEqual(json.loads(self.requests[-1].content), {
            "query": "python web scraping",
            "limit": 5,
            "sources": [{"type": "web"}],
            "scrapeOptions": {"formats": ["markdown"]},
        })

    def test_extract_endpoints(self):
        self.responses[("POST", "/v2/extract")] = {"success": True, "id": "ext-1"}
        self.responses[("GET", "/v2/extract/ext-1")] = {
            "success": True,
            "status": "completed",
            "data": {"extract": {"name": "Firecrawl", "employees": 25}},
        }
        self.responses[("DELETE", "/v2/extract/ext-1")] = {"success": True}

        started = self.client.start_extract(["https://example.com"], prompt="Company name")
        self.assertEqual(started.id, "ext-1")
        self.assertEqual(
            json.loads(self.requests[-1].content),
            {"urls": ["https://example.com"], "prompt": "Company name"},
        )

        status = self.client.get_extract_status("ext-1")
        self.assertEqual(status.status, ExtractJobStatus.COMPLETED)
        self.assertEqual(status.data.extract["employees"], 25)

        self.assertTrue(self.client.cancel_extract("ext-1").success)
        self.assertEqual(self.last(), ("DELETE", "/v2/extract/ext-1"))

    def test_batch_scrape_endpoints(self):
        self.responses[("POST", "/v2/batch/scrape")] = {
            "success": True,
            "id": "batch-1",
            "invalidURLs": ["not-a-url"],
        }
        self.responses[("GET", "/v2/batch/scrape/batch-1")] = {"status": "completed", "total": 2}
        self.responses[("GET", "/v2/batch/scrape/batch-1/errors")] = {"errors": []}

        started = self.client.start_batch_scrape(
            ["https://a.example", "https://b.example"], max_concurrency=2
        )
        self.assertEqual(started.invalid_urls, ["not-a-url"])
        self.assertEqual(json.loads(self.requests[-1].content), {
            "urls": ["https://a.example", "https://b.example"],
            "formats": "markdown",
            "maxConcurrency": 2,
        })

        self.assertEqual(self.client.get_batch_scrape_status("batch-1").total, 2)
        self.client.cancel_batch_scrape("batch-1")
        self.assertEqual(self.last(), ("DELETE", "/v2/batch/scrape/batch-1"))
        self.assertEqual(self.client.get_batch_scrape_errors("batch-1").errors, [])

    def test_team_endpoints(self):
        self.responses[("GET", "/v2/team/credit-usage")] = {
            "success": True,
            "data": {"remainingCredits": 900, "planCredits": 1000},
        }
        self.responses[("GET", "/v2/team/credit-usage/historical")] = {
            "success": True,
            "periods": [{"startDate": "2025-01-01", "endDate": "2025-01-31", "apiKey": "key-1", "totalCredits": 42}],
        }
        self.responses[("GET", "/v2/team/queue-status")] = {
            "success": True,
            "jobsInQueue": 3,
            "maxConcurrency": 5,
        }

        self.assertEqual(self.client.get_credit_usage().data.remaining_credits, 900)

        history = self.client.get_historical_credit_usage(by_api_key=True)
        self.assertEqual(history.periods[0].total_credits, 42)
        self.assertEqual(self.requests[-1].url.params["byApiKey"], "true")

        self.client.get_historical_credit_usage()
        self.assertNotIn("byApiKey", self.requests[-1].url.params)

        self.client.get_token_usage()
        self.assertEqual(self.last(), ("GET", "/v2/team/token-usage"))
        self.client.get_historical_token_usage(by_api_key=True)
        self.assertEqual(self.last(), ("GET", "/v2/team/token-usage/historical"))

        self.assertEqual(self.client.get_queue_status().jobs_in_queue, 3)

    def test_job_id_is_escaped_in_path(self):
        self.responses[("GET", "/v2/crawl/a/b")] = {"status": "completed"}
        self.client.get_crawl_status("a/b")
        self.assertEqual(self.requests[-1].url.raw_path, b"/v2/crawl/a%2Fb")

    def test_empty_job_id(self):
        with self.assertRaises(ValueError):
            self.client.get_crawl_status("")


class TestJobWaiting(unittest.TestCase):

    def make_job_client(self, start_path, status_path, statuses, start_body=None):
        self.status_checks = 0
        remaining = list(statuses)

        def handler(request):
            if request.method == "POST" and request.url.path == start_path:
                return json_response(start_body or {"success": True, "id": "job-1"})
            if request.method == "GET" and request.url.path == status_path:
                self.status_checks += 1
                status = remaining.pop(0) if len(remaining) > 1 else remaining[0]
                return json_response({"success": True, "status": status, "total": 1, "completed": 1})
            return json_response({"success": False, "error": "unexpected"}, 404)

        return make_client(handler, poll_interval=0.01, job_timeout=5)

    def test_crawl_waits_until_completed(self):
        client = self.make_job_client(
            "/v2/crawl", "/v2/crawl/job-1", ["scraping", "scraping", "completed"]
        )
        status = client.crawl("https://example.com", limit=1)
        self.assertIsInstance(status, CrawlStatusResponse)
        self.assertEqual(status.status, JobStatus.COMPLETED)
        self.assertEqual(self.status_checks, 3)

    def test_batch_scrape_returns_failed_status(self):
        client = self.make_job_client(
            "/v2/batch/scrape", "/v2/batch/scrape/job-1", ["scraping", "failed"]
        )
        status = client.batch_scrape(["https://example.com"])
        self.assertEqual(status.status, JobStatus.FAILED)
        self.assertEqual(self.status_checks, 2)

    def test_extract_waits_through_processing(self):
        client = self.make_job_client(
            "/v2/extract", "/v2/extract/job-1", ["processing", "completed"]
        )
        status = client.extract(["https://example.com"], prompt="Title")
        self.assertEqual(status.status, ExtractJobStatus.COMPLETED)

    def test_start_response_without_id(self):
        client = self.make_job_client(
            "/v2/crawl", "/v2/crawl/job-1", ["completed"], start_body={"success": True}
        )
        with self.assertRaises(InvalidResponseError):
            client.crawl("https://example.com")
        self.assertEqual(self.status_checks, 0)

    def test_status_error_stops_waiting(self):
        def handler(request):
            if request.method == "POST":
                return json_response({"success": True, "id": "job-1"})
            return json_response({"success": False, "error": "Unauthorized"}, 401)

        client = make_client(handler, poll_interval=0.01)
        with self.assertRaises(UnauthorizedError):
            client.crawl("https://example.com")


class TestExecutorFailures(unittest.TestCase):

    def test_status_error_uses_envelope_message(self):
        client = make_client(lambda request: json_response(
            {"success": False, "error": "Unauthorized: Invalid token"}, 401
        ))
        with self.assertRaises(UnauthorizedError) as ctx:
            client.scrape("https://example.com")
        self.assertEqual(ctx.exception.message, "Unauthorized: Invalid token")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_bad_request_with_validation_errors(self):
        client = make_client(lambda request: json_response({
            "success": False,
            "error": "Invalid request",
            "validation_errors": [{"field": "url", "message": "url is required", "code": "required"}],
        }, 400))
        with self.assertRaises(BadRequestError) as ctx:
            client.scrape("https://example.com")
        self.assertEqual(ctx.exception.validation_errors[0].field, "url")
        self.assertEqual(ctx.exception.message, "Invalid request: url is required")

    def test_unclassified_status(self):
        client = make_client(lambda request: httpx.Response(418, text="I'm a teapot"))
        with self.assertRaises(UnknownError) as ctx:
            client.scrape("https://example.com")
        self.assertEqual(ctx.exception.status_code, 418)
        self.assertEqual(ctx.exception.message, "I'm a teapot")

    def test_malformed_success_body(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with self.assertRaises(DecodingError):
            client.scrape("https://example.com")

    def test_success_body_missing_required_field(self):
        client = make_client(lambda request: json_response({"total": 3}))
        with self.assertRaises(DecodingError):
            client.get_crawl_status("job-1")

    def test_success_body_not_an_object(self):
        client = make_client(lambda request: json_response(["not", "an", "object"]))
        with self.assertRaises(InvalidResponseError):
            client.scrape("https://example.com")

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client = make_client(handler)
        with self.assertRaises(NetworkError):
            client.scrape("https://example.com")

    def test_timeout_is_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)
        with self.assertRaises(NetworkError):
            client.get_queue_status()

    def test_invalid_base_url(self):
        sent = []
        client = make_client(lambda request: sent.append(request), api_url="ftp://example.com")
        with self.assertRaises(InvalidURLError):
            client.get_queue_status()
        self.assertEqual(sent, [])


class TestResponseSizeCap(unittest.TestCase):

    def test_declared_length_over_cap(self):
        client = make_client(lambda request: httpx.Response(200, content=b"x" * 65), max_response_bytes=64)
        with self.assertRaises(ResponseTooLargeError) as ctx:
            client.get_queue_status()
        self.assertIsInstance(ctx.exception, NetworkError)
        self.assertEqual(ctx.exception.limit, 64)

    def test_streamed_body_over_cap(self):
        def handler(request):
            # an iterator body is sent without Content-Length
            return httpx.Response(200, content=iter([b"x" * 40, b"x" * 40]))

        client = make_client(handler, max_response_bytes=64)
        with self.assertRaises(ResponseTooLargeError):
            client.get_queue_status()

    def test_body_under_cap(self):
        client = make_client(lambda request: json_response({"success": True}), max_response_bytes=64)
        self.assertTrue(client.get_queue_status().success)

    def test_error_body_over_cap(self):
        client = make_client(
            lambda request: httpx.Response(500, content=b"x" * 100), max_response_bytes=64
        )
        with self.assertRaises(ResponseTooLargeError):
            client.get_queue_status()


class TestLifecycle(unittest.TestCase):

    def test_close_releases_owned_client_once(self):
        client = Firecrawl(api_key="test-key")
        client.close()
        client.close()
        self.assertTrue(client._client.is_closed)

    def test_external_client_is_not_closed(self):
        http_client = httpx.Client(transport=httpx.MockTransport(lambda r: json_response({})))
        with Firecrawl(api_key="test-key", http_client=http_client):
            pass
        self.assertFalse(http_client.is_closed)
        http_client.close()

    def test_calls_after_close_fail(self):
        client = Firecrawl(api_key="test-key")
        client.close()
        with self.assertRaises(NetworkError):
            client.scrape("https://example.com")


class TestConcurrency(unittest.TestCase):

    def test_parallel_calls_do_not_mix_results(self):
        def handler(request):
            url = json.loads(request.content)["url"]
            return json_response({
                "success": True,
                "data": {"markdown": f"content of {url}", "metadata": {"sourceURL": url}},
            })

        client = make_client(handler)
        urls = [f"https://example.com/page/{i}" for i in range(32)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(client.scrape, urls))

        for url, result in zip(urls, results):
            self.assertEqual(result.data.metadata.source_url, url)
            self.assertEqual(result.data.markdown, f"content of {url}")


if __name__ == '__main__':
    unittest.main()
