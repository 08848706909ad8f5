"""Download rustdoc pages and turn them into paged documentation."""

from __future__ import annotations

import httpx
from loguru import logger

from docbot.config.schema import DocsConfig, PagingConfig
from docbot.docs.builder import build_documentation
from docbot.docs.pages import Documentation
from docbot.docs.parser import parse_document
from docbot.path import DocPath


class DocumentFetcher:
    """Resolves a :class:`DocPath` to :class:`Documentation`.

    Candidate URLs are tried in order; the first one answering 200 wins.
    Transport errors are not retried and propagate to the caller.
    """

    def __init__(
        self,
        docs: DocsConfig,
        paging: PagingConfig,
        client: httpx.AsyncClient | None = None,
    ):
        self.docs = docs
        self.paging = paging
        self._client = client

    def candidates(self, path: DocPath) -> list[str]:
        return path.docs_urls(self.docs.docs_base_url, self.docs.std_base_url, self.docs.version)

    async def fetch(self, path: DocPath) -> Documentation | None:
        if self._client is not None:
            return await self._fetch_with(self._client, path)
        async with httpx.AsyncClient(timeout=self.docs.timeout, follow_redirects=True) as client:
            return await self._fetch_with(client, path)

    async def _fetch_with(self, client: httpx.AsyncClient, path: DocPath) -> Documentation | None:
        for url in self.candidates(path):
            response = await client.get(url)
            if response.status_code != 200:
                logger.debug(f"{url} -> {response.status_code}")
                continue

            base_url = str(response.url)
            document = parse_document(response.text)
            if document is None:
                logger.warning(f"Could not parse documentation page {base_url}")
                return None

            documentation = build_documentation(
                document,
                base_url,
                limit=self.paging.page_limit,
                group_size=self.paging.group_size,
            )
            logger.info(f"Built {path.display} from {base_url} ({len(documentation)} pages)")
            return documentation

        return None
