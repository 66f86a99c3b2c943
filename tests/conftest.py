import pytest


def make_fragment(
    product_id="1001",
    name="Remera",
    url="https://gmnimportados.mitiendanube.com/productos/remera/",
    srcset="//acdn.mitiendanube.com/stores/remera-480-0.webp 480w, //acdn.mitiendanube.com/stores/remera-640-0.webp 640w",
    data_srcset=None,
    price="$ 100,00",
    promo=None,
    variants=("M",),
    with_image=True,
):
    """Build a product list item the way the storefront renders it."""
    id_attr = f' data-product-id="{product_id}"' if product_id is not None else ""

    image = ""
    if with_image:
        attrs = ""
        if srcset is not None:
            attrs += f' srcset="{srcset}"'
        if data_srcset is not None:
            attrs += f' data-srcset="{data_srcset}"'
        image = f'<img class="js-product-item-image-private product-item-image-featured"{attrs}>'

    promo_html = ""
    if promo is not None:
        promo_html = f'<div class="js-promotion-label-private label"><span>{promo}</span></div>'

    variants_html = "".join(
        f'<a class="js-insta-variant btn-variant" data-option="{v}">{v}</a>' for v in variants
    )

    name_html = f'<div class="js-item-name item-name">  {name}  </div>' if name is not None else ""
    price_html = f'<span class="js-price-display item-price">{price}</span>' if price is not None else ""

    return (
        f'<div class="js-item-product" data-product-type="list"{id_attr}>'
        f'<a class="item-link" href="{url}">{image}</a>'
        f"{promo_html}"
        f"{name_html}"
        f"{price_html}"
        f'<div class="item-variants">{variants_html}</div>'
        "</div>"
    )


@pytest.fixture
def fragment_factory():
    return make_fragment
