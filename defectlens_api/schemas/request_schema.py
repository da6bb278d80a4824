from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Any

class WebsiteData(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Loosely typed: odd shapes degrade to placeholders instead of failing the request
    html: Any = None
    markdown: Any = None
    links: Any = None
    metadata: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> "WebsiteData":
        """Bundle from a request value; anything but an object is an empty bundle."""
        if isinstance(raw, dict):
            return cls.model_validate(raw)
        return cls()

class AnalyzeWebsiteRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "websiteData": {
                    "markdown": "# Welcome\nBuy our product today!",
                    "links": ["https://example.com/about"],
                    "metadata": {"title": "Example", "sourceURL": "https://example.com"}
                },
                "url": "https://example.com"
            }
        }
    )

    website_data: Any = Field(None, alias="websiteData")
    url: Any = None

    @property
    def has_website_data(self) -> bool:
        return bool(self.website_data)

    def bundle(self) -> WebsiteData:
        return WebsiteData.from_raw(self.website_data)
