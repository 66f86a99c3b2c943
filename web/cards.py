from html import escape
from urllib.parse import quote

from config import settings
from scraper import ProductRecord

# Characters encodeURIComponent leaves untouched
URI_COMPONENT_SAFE = "-_.!~*'()"


def whatsapp_url(message: str, phone: str = None) -> str:
    """Build a wa.me link with the message pre-filled."""
    phone = phone or settings.whatsapp_phone
    return f"https://wa.me/{phone}?text={quote(message, safe=URI_COMPONENT_SAFE)}"


def format_buy_message(product: ProductRecord) -> str:
    return (
        f"Hola! Quisiera comprar el producto {product.product_name} {product.price}. "
        "¿Puede enviarme información, formas de pago y precio de envío? Gracias"
    )


def render_card(product: ProductRecord, whatsapp_phone: str = None) -> str:
    """
    Render one product as a catalog card.

    All product text is HTML-escaped. The cart button hands name and price to
    the page script through data attributes instead of inline JS strings.
    """
    name = escape(product.product_name)
    price = escape(product.price)
    buy_url = escape(whatsapp_url(format_buy_message(product), whatsapp_phone))

    promo_html = ""
    if product.has_promo:
        promo_html = f"""
          <div class="absolute top-3 left-3 bg-red-500 text-white px-3 py-1 rounded-full text-xs font-semibold promo-badge">
            {escape(product.promo_text)}
          </div>"""

    variants_html = ""
    if product.variants:
        chips = "".join(
            f'<span class="px-3 py-1 text-xs bg-gray-100 text-gray-700 rounded-full variant-chip">{escape(v)}</span>'
            for v in product.variants
        )
        variants_html = f"""
        <div class="flex gap-2 mb-3 flex-wrap justify-center">
          {chips}
        </div>"""

    return f"""
    <div class="product-card bg-white rounded-lg shadow-md overflow-hidden hover:shadow-xl transition-shadow duration-300">
      <div class="relative aspect-square overflow-hidden group">
        <img src="{escape(product.image_src)}"
             alt="{name}"
             class="w-full h-full object-cover group-hover:scale-105 transition-transform duration-300">{promo_html}
      </div>

      <div class="p-4 flex flex-col">{variants_html}

        <div class="text-center mb-3">
          <span class="text-3xl font-bold text-gray-900">{price}</span>
        </div>

        <button type="button"
                data-name="{name}"
                data-price="{price}"
                onclick="cart.add(this.dataset.name, this.dataset.price)"
                class="bg-blue-600 hover:bg-blue-700 text-white px-6 py-3 rounded-lg text-base font-semibold transition-colors duration-200 text-center w-full block mb-2">
          Agregar al carrito
        </button>

        <a href="{buy_url}"
           target="_blank"
           rel="noopener"
           class="bg-green-600 hover:bg-green-700 text-white px-6 py-3 rounded-lg text-base font-semibold transition-colors duration-200 no-underline text-center w-full block mb-3">
          Comprar
        </a>

        <h3 class="text-base font-semibold text-gray-700 text-center line-clamp-2">{name}</h3>
      </div>
    </div>
"""
