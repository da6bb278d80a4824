import json
from typing import Dict, Any
from defectlens_api.schemas.request_schema import WebsiteData

# Upstream token budget
HTML_CHAR_LIMIT = 15000
MARKDOWN_CHAR_LIMIT = 10000
LINK_LIMIT = 50

PLACEHOLDER = "Not available"

def _clip(text, limit: int) -> str:
    if not isinstance(text, str):
        text = ""
    return text[:limit] or PLACEHOLDER

def _to_json(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)

def preprocess_content(data: WebsiteData) -> Dict[str, Any]:
    """Truncate a content bundle into the pieces embedded in the user prompt.

    ``link_count`` is the size of the full link list; only the first
    ``LINK_LIMIT`` links are serialized. Links and metadata that are not the
    usual list and object are serialized as given.
    """
    links = data.links or []
    if isinstance(links, (list, str)):
        link_count, shown = len(links), links[:LINK_LIMIT]
    else:
        link_count, shown = 0, links
    return {
        "html": _clip(data.html, HTML_CHAR_LIMIT),
        "markdown": _clip(data.markdown, MARKDOWN_CHAR_LIMIT),
        "link_count": link_count,
        "links_json": _to_json(shown),
        "metadata_json": _to_json(data.metadata or {}),
    }
