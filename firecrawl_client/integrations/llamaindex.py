"""Firecrawl reader for LlamaIndex."""

from typing import Any, List, Optional

# LlamaIndex is an optional dependency
try:
    from llama_index.core.readers.base import BaseReader
    from llama_index.core.schema import Document
except ImportError:
    raise ImportError(
        "llama-index-core is required for FirecrawlReader. "
        "Install it with: pip install 'firecrawl-client[llamaindex]'"
    )

from ..client import Firecrawl
from ..exceptions import FirecrawlError
from . import page_content, page_metadata


class FirecrawlReader(BaseReader):
    """Read web pages into LlamaIndex documents through the Firecrawl scrape API.

    Example:
        >>> from firecrawl_client.integrations.llamaindex import FirecrawlReader
        >>>
        >>> reader = FirecrawlReader(api_key="fc-...")
        >>> documents = reader.load_data(urls=[
        ...     "https://example.com",
        ...     "https://example.com/about",
        ... ])
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        client: Optional[Firecrawl] = None,
        **scrape_options: Any,
    ):
        self._client = client or Firecrawl(api_key=api_key, api_url=api_url)
        self._scrape_options = scrape_options

    def load_data(self, urls: List[str]) -> List[Document]:
        """Load documents from URLs.

        Args:
            urls: List of URLs to load

        Returns:
            List of Document objects with the page markdown and metadata
        """
        documents = []

        for url in urls:
            try:
                response = self._client.scrape(url, **self._scrape_options)
            except FirecrawlError as e:
                # On error, append empty document with error in metadata
                documents.append(Document(text="", metadata={"source": url, "error": str(e)}))
                continue

            documents.append(Document(
                text=page_content(response),
                metadata=page_metadata(url, response),
            ))

        return documents
