"""Document loaders for LLM frameworks, built on :class:`Firecrawl`.

Each integration lives in its own module and imports its framework lazily, so
install only the one you use::

    pip install "firecrawl-client[langchain]"
    pip install "firecrawl-client[llamaindex]"
"""

from typing import Any, Dict

from ..types import ScrapeResponse


def page_metadata(url: str, response: ScrapeResponse) -> Dict[str, Any]:
    """Document metadata for a scraped page."""
    metadata = response.data.metadata if response.data else None
    if metadata is None:
        return {"source": url}
    return {
        "source": metadata.source_url or url,
        "title": metadata.title,
        "description": metadata.description,
        "language": metadata.language,
        "status_code": metadata.status_code,
    }


def page_content(response: ScrapeResponse) -> str:
    if response.data is None:
        return ""
    return response.data.markdown or ""
