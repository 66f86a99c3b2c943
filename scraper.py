import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from playwright.async_api import async_playwright
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeout
from bs4 import BeautifulSoup

from config import settings
from pricing import PriceConverter, PriceInputError, parse_price

logger = logging.getLogger(__name__)

NAME_SELECTOR = ".js-item-name"
LINK_SELECTOR = ".item-link"
IMAGE_SELECTOR = ".js-product-item-image-private.product-item-image-featured"
PRICE_SELECTOR = ".js-price-display"
PROMO_SELECTOR = ".js-promotion-label-private"
VARIANT_SELECTOR = ".js-insta-variant"


class FetchError(Exception):
    """A storefront page could not be loaded."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to fetch {url}: {cause}")


class FetchTimeoutError(FetchError):
    """The page did not settle within the allowed time."""


class ExtractionError(Exception):
    """A product fragment could not be turned into a record."""


class PriceParseError(ExtractionError):
    def __init__(self, price_text: str, product_name: str = ""):
        self.price_text = price_text
        self.product_name = product_name
        super().__init__(f"Unparseable price {price_text!r} for product {product_name!r}")


@dataclass(frozen=True)
class ProductRecord:
    """One product as shown in the storefront listing."""
    product_name: str
    price: str
    product_id: Optional[str] = None
    product_url: Optional[str] = None
    image_src: str = ""
    has_promo: bool = False
    promo_text: str = ""
    variants: tuple[str, ...] = field(default_factory=tuple)


class PageFetcher:
    """
    Loads one listing page in a headless Chromium and returns the outer HTML
    of every product element on it.

    Each call launches and closes its own browser; nothing is shared between
    fetches.
    """

    def __init__(
        self,
        product_selector: str = None,
        timeout_seconds: float = None,
        navigation_timeout_ms: int = None,
        headless: bool = None,
    ):
        self.product_selector = product_selector or settings.product_selector
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.fetch_timeout_seconds
        self.navigation_timeout_ms = navigation_timeout_ms if navigation_timeout_ms is not None else settings.navigation_timeout_ms
        self.headless = settings.browser_headless if headless is None else headless

    async def fetch(self, url: str) -> list[str]:
        try:
            return await asyncio.wait_for(self._render(url), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(url, e) from e
        except PlaywrightTimeout as e:
            raise FetchTimeoutError(url, e) from e
        except PlaywrightError as e:
            raise FetchError(url, e) from e
        except Exception as e:
            raise FetchError(url, e) from e

    async def _render(self, url: str) -> list[str]:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self.headless, args=settings.browser_args)
            try:
                page = await browser.new_page()
                await page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
                fragments = await page.eval_on_selector_all(
                    self.product_selector,
                    "elements => elements.map(el => el.outerHTML)",
                )
                logger.debug(f"Found {len(fragments)} product elements on {url}")
                return fragments
            finally:
                await browser.close()


class ProductExtractor:
    """Parses a single product fragment into a ProductRecord."""

    def __init__(self, converter: PriceConverter = None, product_selector: str = None):
        self.converter = converter or PriceConverter()
        self.product_selector = product_selector or settings.product_selector

    def extract(self, fragment: str) -> ProductRecord:
        soup = BeautifulSoup(fragment, "lxml")

        item = soup.select_one(self.product_selector)
        product_id = item.get("data-product-id") if item else None

        product_name = self._text(soup, NAME_SELECTOR)

        link = soup.select_one(LINK_SELECTOR)
        product_url = link.get("href") if link else None

        image_src = self._image_src(soup)

        price_text = self._text(soup, PRICE_SELECTOR)
        amount = parse_price(price_text)
        if amount is None:
            raise PriceParseError(price_text, product_name)
        try:
            price = self.converter.convert(amount)
        except PriceInputError as e:
            raise PriceParseError(price_text, product_name) from e

        promo_text = ""
        if soup.select_one(PROMO_SELECTOR):
            promo_text = self._text(soup, f"{PROMO_SELECTOR} span")
        has_promo = bool(promo_text)

        variants = tuple(
            el["data-option"] for el in soup.select(VARIANT_SELECTOR)
            if el.get("data-option") is not None
        )

        return ProductRecord(
            product_id=product_id,
            product_name=product_name,
            product_url=product_url,
            image_src=image_src,
            price=price,
            has_promo=has_promo,
            promo_text=promo_text,
            variants=variants,
        )

    @staticmethod
    def _text(soup: BeautifulSoup, selector: str) -> str:
        elem = soup.select_one(selector)
        return elem.get_text().strip() if elem else ""

    @staticmethod
    def _image_src(soup: BeautifulSoup) -> str:
        """Pick the featured image URL, skipping inline placeholder data."""
        img = soup.select_one(IMAGE_SELECTOR)
        if not img:
            return ""

        srcset = img.get("srcset")
        if not srcset or _is_inline_data(srcset):
            srcset = img.get("data-srcset")
        if not srcset:
            return ""

        candidates = srcset.split()
        if not candidates:
            return ""
        url = candidates[0]
        if url.startswith("//"):
            url = "https:" + url
        return url


def _is_inline_data(value: str) -> bool:
    return "base64" in value or value.lstrip().startswith("data:")
