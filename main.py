#!/usr/bin/env python3
"""
Storefront Catalog - Main Entry Point

Scrapes the Tiendanube storefront and serves it as a single catalog page
with a WhatsApp cart.
"""
import asyncio
import logging
import sys
from pathlib import Path

import uvicorn

from config import settings
from web.application import create_app, render_catalog
from catalog import CatalogBuilder

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(settings.log_file)
    ]
)
logger = logging.getLogger(__name__)


def serve():
    """Run the catalog web server."""
    app = create_app()
    logger.info(f"Server running on http://localhost:{settings.server_port}")
    logger.info(f"Open http://localhost:{settings.server_port}/productos to see the catalog")
    uvicorn.run(app, host=settings.server_host, port=settings.server_port, log_config=None)


def run_once(output_file: str = None) -> Path:
    """Build the catalog once and write it to disk."""
    path = Path(output_file or settings.output_file)
    html = asyncio.run(render_catalog(CatalogBuilder()))
    path.write_text(html, encoding="utf-8")
    logger.info(f"Catalog written to {path}")
    return path


def main():
    """Main entry point."""
    if len(sys.argv) > 1:
        command = sys.argv[1]
        if command == "serve":
            serve()
        elif command == "once":
            print("Building catalog once...")
            run_once(sys.argv[2] if len(sys.argv) > 2 else None)
        else:
            print(f"Unknown command: {command}")
            print("Usage: python main.py [serve|once [output_file]]")
            sys.exit(1)
    else:
        print("Starting Storefront Catalog...")
        print(f"Pages per catalog: {settings.page_count}")
        print("-" * 40)
        serve()


if __name__ == "__main__":
    main()
