"""Plugin documentation URLs from the Jenkins update center."""

from typing import Optional

from plugin_report.errors import FetchError
from plugin_report.sources.base import BaseFetcher


class DocumentationSource:
    """Load the plugin key -> metadata mapping published by the update center."""

    source_name = "documentation"

    URL = "http://updates.jenkins.io/plugin-documentation-urls.json"

    def __init__(self, fetcher: BaseFetcher, url: Optional[str] = None):
        self.fetcher = fetcher
        self.url = url or self.URL

    def collect(self) -> dict[str, dict]:
        """Fetch the documentation feed.

        Returns:
            Mapping of plugin key to its metadata object, in feed order.
            Only ``url`` is used from the metadata.
        """
        data = self.fetcher.fetch(self.url, "json")
        if not isinstance(data, dict):
            raise FetchError(
                self.url, ValueError(f"expected a JSON object, got {type(data).__name__}")
            )

        documentation = {}
        for key, entry in data.items():
            # Entries without metadata still produce a record
            entry = dict(entry) if isinstance(entry, dict) else {}
            url = entry.get("url")
            if url is not None and not isinstance(url, str):
                raise FetchError(
                    self.url,
                    ValueError(f"url of {key!r} is not a string: {url!r}"),
                )
            documentation[key] = entry

        print(f"Loaded {len(documentation)} plugins from the documentation feed")
        return documentation
