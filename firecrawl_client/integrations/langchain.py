"""Firecrawl document loader for LangChain."""

from typing import Any, Iterator, List, Optional

# LangChain is an optional dependency
try:
    from langchain_core.documents import Document
    from langchain_core.document_loaders.base import BaseLoader
except ImportError:
    raise ImportError(
        "langchain-core is required for FirecrawlLoader. "
        "Install it with: pip install 'firecrawl-client[langchain]'"
    )

from ..client import Firecrawl
from ..exceptions import FirecrawlError
from . import page_content, page_metadata


class FirecrawlLoader(BaseLoader):
    """Load web pages as LangChain documents through the Firecrawl scrape API.

    Example:
        >>> from firecrawl_client.integrations.langchain import FirecrawlLoader
        >>>
        >>> loader = FirecrawlLoader(
        ...     urls=["https://example.com", "https://example.com/about"],
        ...     api_key="fc-...",
        ...     only_main_content=True,
        ... )
        >>>
        >>> documents = loader.load()
        >>> for doc in documents:
        ...     print(doc.page_content[:100])
        ...     print(doc.metadata)
    """

    def __init__(
        self,
        urls: List[str],
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        client: Optional[Firecrawl] = None,
        **scrape_options: Any,
    ):
        """Initialize the loader.

        Args:
            urls: List of URLs to load
            api_key: Firecrawl API key (default: ``FIRECRAWL_API_KEY``)
            api_url: Firecrawl API base URL
            client: Existing client to reuse instead of creating one
            **scrape_options: Options passed to ``Firecrawl.scrape`` for
                every URL, e.g. ``only_main_content`` or ``wait_for``
        """
        self.urls = urls
        self.client = client or Firecrawl(api_key=api_key, api_url=api_url)
        self.scrape_options = scrape_options

    def lazy_load(self) -> Iterator[Document]:
        """Lazily load documents from URLs.

        A URL that cannot be scraped yields an empty document with the error
        in its metadata.

        Yields:
            Document objects with the page markdown and metadata
        """
        for url in self.urls:
            try:
                response = self.client.scrape(url, **self.scrape_options)
            except FirecrawlError as e:
                yield Document(
                    page_content="",
                    metadata={"source": url, "error": str(e)},
                )
                continue

            yield Document(
                page_content=page_content(response),
                metadata=page_metadata(url, response),
            )

    def load(self) -> List[Document]:
        return list(self.lazy_load())
