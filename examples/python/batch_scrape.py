"""
Firecrawl: Batch Scrape Example (Python)

Scrapes multiple URLs in parallel with the async client, then runs the same
URLs as a single server-side batch job.

Setup:
    pip install firecrawl-client
    export FIRECRAWL_API_KEY=fc-your_key_here

Run:
    python examples/python/batch_scrape.py
"""

import asyncio
import time

from firecrawl_client import AsyncFirecrawl, FirecrawlError

# URLs to scrape in parallel
URLS = [
    "https://stripe.com/pricing",
    "https://vercel.com/pricing",
    "https://netlify.com/pricing",
    "https://railway.app/pricing",
    "https://render.com/pricing",
]


async def scrape_one(app: AsyncFirecrawl, url: str) -> dict:
    """Scrape a single URL and return a result dict."""
    try:
        result = await app.scrape(url)
    except FirecrawlError as e:
        return {"url": url, "status": "error", "error": str(e)}
    markdown = result.data.markdown or ""
    return {
        "url": url,
        "title": result.data.metadata.title,
        "status": "ok",
        "preview": markdown[:200] + "..." if len(markdown) > 200 else markdown,
    }


async def main():
    async with AsyncFirecrawl() as app:
        start = time.time()
        print(f"Scraping {len(URLS)} URLs in parallel...\n")

        # One connection pool, many concurrent requests
        results = await asyncio.gather(*[scrape_one(app, url) for url in URLS])

        for r in results:
            if r["status"] == "ok":
                print(f"OK    {r['url']}")
                print(f"      Title:   {r['title']}")
                print(f"      Preview: {r['preview'][:100]}...")
            else:
                print(f"ERROR {r['url']}: {r['error']}")
            print()

        ok = sum(1 for r in results if r["status"] == "ok")
        print("---")
        print(f"Scraped {ok}/{len(URLS)} pages in {time.time() - start:.1f}s total\n")

        # The same URLs as one batch job, polled until it finishes
        status = await app.batch_scrape(URLS, formats=["markdown"], max_concurrency=3)
        print(f"Batch job {status.status.value}: {status.completed}/{status.total} pages")


asyncio.run(main())

"""
Expected output:

Scraping 5 URLs in parallel...

OK    https://stripe.com/pricing
      Title:   Pricing & Fees | Stripe
      Preview: # Stripe Pricing...

...

---
Scraped 5/5 pages in 1.4s total

Batch job completed: 5/5 pages
"""
