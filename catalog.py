import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterator, Protocol

from config import settings
from scraper import (
    ExtractionError,
    FetchError,
    PageFetcher,
    ProductExtractor,
    ProductRecord,
)

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self, url: str) -> list[str]: ...


@dataclass
class CatalogResult:
    """Products gathered in one build, in page order then DOM order."""
    products: list[ProductRecord] = field(default_factory=list)
    failed_pages: list[int] = field(default_factory=list)
    skipped_products: int = 0

    def __iter__(self) -> Iterator[ProductRecord]:
        return iter(self.products)

    def __len__(self) -> int:
        return len(self.products)


class CatalogBuilder:
    """
    Walks the storefront listing pages one after another and collects every
    product with a name.

    A page that fails to load is logged and skipped; so is a single product
    whose price cannot be read. Duplicate product ids across pages are kept.
    """

    def __init__(self, fetcher: Fetcher = None, extractor: ProductExtractor = None, url_template: str = None):
        self.fetcher = fetcher or PageFetcher()
        self.extractor = extractor or ProductExtractor()
        self.url_template = url_template or settings.store_url_template

    def page_url(self, page_num: int) -> str:
        return self.url_template.format(page=page_num)

    async def build(self, page_count: int) -> CatalogResult:
        if page_count < 0:
            raise ValueError(f"page_count must not be negative, got {page_count}")

        result = CatalogResult()

        for page_num in range(1, page_count + 1):
            url = self.page_url(page_num)
            logger.info(f"Scraping page {page_num}: {url}")

            try:
                fragments = await self.fetcher.fetch(url)
            except FetchError as e:
                logger.error(f"Error on page {page_num}: {e}")
                result.failed_pages.append(page_num)
                continue

            products, skipped = await asyncio.to_thread(self._extract_page, fragments)
            result.products.extend(products)
            result.skipped_products += skipped

            logger.info(f"Page {page_num}: {len(products)} products ({skipped} skipped)")

        logger.info(
            f"Catalog complete: {len(result.products)} products, "
            f"{len(result.failed_pages)} failed pages, {result.skipped_products} skipped"
        )
        return result

    def _extract_page(self, fragments: list[str]) -> tuple[list[ProductRecord], int]:
        """Extract all fragments of one page. Returns (products, skipped_count)."""
        products = []
        skipped = 0
        for fragment in fragments:
            try:
                product = self.extractor.extract(fragment)
            except ExtractionError as e:
                logger.warning(f"Skipping product: {e}")
                skipped += 1
                continue

            if not product.product_name:
                skipped += 1
                continue
            products.append(product)
        return products, skipped
