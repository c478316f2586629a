import httpx
import pytest

COMMERCIAL_HTML = """
<table><tbody>
<tr><td><strong>Model #:</strong></td><td><span style="color: #003366;">303-75-1</span></td></tr>
<tr><td><strong>Sizes:</strong></td><td><span style="color: #003366;">18&#8242; L x 15&#8242; W x 16&#8242; H</span></td></tr>
<tr><td><strong>Weight (lbs):</strong></td><td><span style="color: #003366;">245 lbs</span></td></tr>
<tr><td><strong>Riders:</strong></td><td><span style="color: #003366;">6-8</span></td></tr>
<tr><td><strong>Pieces:</strong></td><td><span style="color: #003366;">1</span></td></tr>
<tr><td><strong>Blowers:</strong></td><td><span style="color: #003366;">1 x 1.5 HP</span></td></tr>
<tr><td><strong>Operators:</strong></td><td><span style="color: #003366;">1</span></td></tr>
<tr><td><strong>Indoor:</strong></td><td><span style="color: #003366;">Yes</span></td></tr>
<tr><td><strong>Outdoor:</strong></td><td><span style="color: #003366;">No</span></td></tr>
<tr><td><strong>Warranty:</strong></td><td><span style="color: #003366;">3   Years</span></td></tr>
</tbody></table>
<p><span style="font-size: medium;">This light commercial palm bounce house features durable vinyl.</span></p>
"""

LIGHT_COMMERCIAL_HTML = """
<center><table>
<tr><td><strong>Sizes</strong></td><td><span style="color: #003366;">14&#8242; x 14&#8242;</span></td></tr>
<tr><td><strong>Players</strong></td><td><span style="color: #003366;">4</span></td></tr>
</table></center>
"""

ART_PANEL_HTML = """
<table>
<tr><td><b>Item #</b></td><td><span>AP-12</span></td></tr>
<tr><td><b>Length:</b></td><td><span>20ft</span></td></tr>
<tr><td><b>Height:</b></td><td><span>12ft</span></td></tr>
</table>
"""

BLOWER_HTML = """
<table>
<tr><td><strong>Model #:</strong></td><td><span style="color: #003366;">B-150</span></td></tr>
<tr><td><strong>Power:</strong></td><td><span style="color: #003366;">1.5 HP</span></td></tr>
<tr><td><strong>Voltage:</strong></td><td><span style="color: #003366;">115 V</span></td></tr>
<tr><td><strong>Frequency:</strong></td><td><span style="color: #003366;">60 HZ</span></td></tr>
<tr><td><strong>Phase:</strong></td><td><span style="color: #003366;">Single</span></td></tr>
<tr><td><strong>R.P.M.:</strong></td><td><span style="color: #003366;">3,350</span></td></tr>
<tr><td><strong>AMPS:</strong></td><td><span style="color: #003366;">7.5 A</span></td></tr>
</table>
"""


def make_wc_product(**overrides):
    product = {
        "id": 101,
        "name": "18 Ft Light Commercial Palm Party",
        "slug": "18-ft-light-commercial-palm-party",
        "sku": "303-75-1",
        "status": "publish",
        "featured": False,
        "description": "",
        "short_description": COMMERCIAL_HTML,
        "regular_price": "2499.00",
        "sale_price": "",
        "on_sale": False,
        "stock_quantity": None,
        "stock_status": "instock",
        "weight": "260",
        "dimensions": {"length": "18", "width": "15", "height": "16"},
        "categories": [{"id": 7, "name": "Bounce &amp; Combos", "slug": "bounce-combos"}],
        "images": [],
        "meta_data": [],
        "date_created": "2023-04-01T09:30:00",
    }
    product.update(overrides)
    return product


@pytest.fixture
def wc_product():
    return make_wc_product()


class FakeStore:
    """Serves categories and products like the WooCommerce API does."""
    def __init__(self, products, categories=None):
        self.products = products
        self.categories = categories or []
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/products/categories"):
            return httpx.Response(200, json=self.categories)
        if path.endswith("/products") and request.method == "HEAD":
            return httpx.Response(200, headers={"x-wp-totalpages": "1"})
        if path.endswith("/products"):
            page = int(request.url.params.get("page", "1"))
            return httpx.Response(200, json=self.products if page == 1 else [])
        return httpx.Response(404)


def image_handler(request):
    if "broken" in request.url.path:
        return httpx.Response(500)
    return httpx.Response(200, content=b"img")

