from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storefront
    store_url_template: str = "https://gmnimportados.mitiendanube.com/productos/page/{page}"
    page_count: int = 10
    product_selector: str = '[data-product-type="list"]'

    # Pricing
    markup_factor: Decimal = Decimal("1.35")

    # Browser
    browser_headless: bool = True
    browser_args: list[str] = ["--no-sandbox", "--disable-setuid-sandbox"]
    navigation_timeout_ms: int = 60000
    fetch_timeout_seconds: float = 90.0

    # Shop front
    shop_name: str = "GWN.SHOP"
    whatsapp_phone: str = "5491165756608"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 3000
    static_dir: str = "."

    # Output
    log_file: str = "catalog.log"
    output_file: str = "catalogo.html"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
