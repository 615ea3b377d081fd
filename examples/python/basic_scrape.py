"""
Firecrawl: Basic Scrape Example (Python)

Scrapes a webpage and prints its content as clean markdown, then crawls a few
pages of the same site and waits for the job to finish.

Setup:
    pip install firecrawl-client
    export FIRECRAWL_API_KEY=fc-your_key_here

Run:
    python examples/python/basic_scrape.py
"""

from firecrawl_client import Firecrawl, FirecrawlError

url = "https://news.ycombinator.com"

# The API key is read from FIRECRAWL_API_KEY
with Firecrawl() as app:
    print(f"Scraping: {url}\n")

    # Markdown is the default format
    result = app.scrape(url, only_main_content=True)
    print(result.data.markdown)

    metadata = result.data.metadata
    print("\n---")
    print(f"Title:        {metadata.title}")
    print(f"Status code:  {metadata.status_code}")

    # Start a crawl and poll until it completes
    try:
        status = app.crawl(url, limit=5, poll_interval=2, wait_timeout=120)
    except FirecrawlError as e:
        print(f"Crawl failed: {e}")
    else:
        print(f"\nCrawl {status.status.value}: {status.completed}/{status.total} pages")
        for page in status.data or []:
            print(f"  {page.metadata.source_url}")

"""
Expected output:

Scraping: https://news.ycombinator.com

# Hacker News

1. **Show HN: I built a terminal emulator in pure CSS** (382 points, 94 comments)
...

---
Title:        Hacker News
Status code:  200

Crawl completed: 5/5 pages
  https://news.ycombinator.com/
  https://news.ycombinator.com/newest
  ...
"""
