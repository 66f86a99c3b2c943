from html import escape
from typing import Iterable

from config import settings

# Inserted verbatim, never formatted
CART_SCRIPT = r"""
  <script>
    class Cart {
      constructor(onChange) {
        this.items = [];
        this.onChange = onChange;
      }

      add(name, price) {
        this.items.push({ name, price });
        this.onChange(this);
      }

      remove(index) {
        this.items.splice(index, 1);
        this.onChange(this);
      }

      checkoutUrl(phone) {
        if (this.items.length === 0) return null;
        const message = 'Hola! Quisiera comprar los siguientes productos:\n\n' +
          this.items.map(item => `${item.name} - ${item.price}`).join('\n') +
          '\n\nGracias!';
        return `https://wa.me/${phone}?text=${encodeURIComponent(message)}`;
      }

      checkout(phone) {
        const url = this.checkoutUrl(phone);
        if (url) window.open(url, '_blank');
      }
    }

    function renderCart(cart) {
      const container = document.getElementById('cart-container');
      const itemsDiv = document.getElementById('cart-items');

      if (cart.items.length === 0) {
        container.classList.add('hidden');
        itemsDiv.replaceChildren();
        return;
      }

      container.classList.remove('hidden');
      itemsDiv.replaceChildren(...cart.items.map((item, i) => {
        const row = document.createElement('div');
        row.className = 'flex justify-between items-center';

        const label = document.createElement('span');
        label.textContent = `${item.name} - ${item.price}`;

        const removeBtn = document.createElement('button');
        removeBtn.className = 'text-red-500 font-bold px-2';
        removeBtn.textContent = 'X';
        removeBtn.addEventListener('click', () => cart.remove(i));

        row.append(label, removeBtn);
        return row;
      }));
    }

    const cart = new Cart(renderCart);

    document.getElementById('checkout-btn').addEventListener('click', () => {
      cart.checkout(document.getElementById('cart-container').dataset.phone);
    });
  </script>
"""

CART_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" class="h-8 w-8 text-gray-800" fill="none" '
    'viewBox="0 0 24 24" stroke="currentColor">'
    '<path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" '
    'd="M3 3h2l.4 2M7 13h10l4-8H5.4M7 13l-1.2 6h12.4L17 13M7 13H5.4M17 13l1.2 6M6 19a1 1 0 100 2 1 1 0 000-2zm12 0a1 1 0 100 2 1 1 0 000-2z" />'
    '</svg>'
)


def render_shop_logo(shop_name: str) -> str:
    """Render 'GWN.SHOP' as three coloured parts; names without a dot stay plain."""
    head, dot, tail = shop_name.partition(".")
    if not dot:
        return f'<span class="text-[#353535]">{escape(shop_name)}</span>'
    return (
        f'<span class="text-[#353535]">{escape(head)}</span>'
        f'<span class="text-[#C23235]">.</span>'
        f'<span class="text-[#3235C2]">{escape(tail)}</span>'
    )


def assemble_page(
    cards: Iterable[str],
    total_count: int,
    shop_name: str = None,
    whatsapp_phone: str = None,
) -> str:
    """Wrap the rendered cards in the full catalog document."""
    shop_name = shop_name or settings.shop_name
    whatsapp_phone = whatsapp_phone or settings.whatsapp_phone
    cards_html = "".join(cards)

    return f"""<!DOCTYPE html>
<html lang="es">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(shop_name)}</title>
  <script src="https://cdn.tailwindcss.com"></script>
  <link href="https://fonts.googleapis.com/css2?family=Poppins:wght@400&display=swap" rel="stylesheet">
  <link rel="icon" type="image/png" href="/{escape(shop_name)}.png">
  <style>
    .line-clamp-2 {{
      display: -webkit-box;
      -webkit-line-clamp: 2;
      -webkit-box-orient: vertical;
      overflow: hidden;
    }}
    .font-poppins {{
      font-family: 'Poppins', sans-serif;
    }}
  </style>
</head>
<body class="bg-white">

  <nav class="w-full bg-white shadow-md fixed top-0 left-0 z-50">
    <div class="container mx-auto px-4 py-3 flex justify-center">
      <h1 class="text-3xl font-normal font-poppins tracking-tight">{render_shop_logo(shop_name)}</h1>
    </div>
  </nav>

  <div class="container mx-auto px-4 py-24">
    <div class="mb-8">
      <h1 class="text-4xl font-bold text-gray-900 mb-2">Catálogo de Productos</h1>
      <p class="text-gray-600">Encontramos {total_count} productos</p>
    </div>

    <div class="grid grid-cols-1 sm:grid-cols-2 lg:grid-cols-3 xl:grid-cols-4 gap-6">
      {cards_html}
    </div>
  </div>

  <div id="cart-container" data-phone="{escape(whatsapp_phone)}"
       class="fixed bottom-5 right-5 bg-white shadow-lg rounded-lg p-4 w-80 max-w-xs hidden z-50">
    <div class="flex items-center gap-2 mb-2">
      {CART_ICON}
      <h2 class="text-lg font-bold">Carrito de compras</h2>
    </div>
    <div id="cart-items" class="flex flex-col gap-2 mb-3"></div>
    <button id="checkout-btn" class="bg-green-600 hover:bg-green-700 text-white px-4 py-2 rounded-lg w-full font-semibold">Comprar todo</button>
  </div>
{CART_SCRIPT}
</body>
</html>
"""
