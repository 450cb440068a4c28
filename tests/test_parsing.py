import pytest

from promo_crawler.utils.parsing import join_root, node_text, parse_document, parse_price, select_first


@pytest.mark.parametrize(
    "text, expected",
    [
        ("$19.99", 19.99),
        ("$ 249.00 ", 249.0),
        ("19", 19.0),
        ("$$5.5", 5.5),
    ],
)
def test_parse_price_strips_dollar_signs(text, expected):
    assert parse_price(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["N/A", "", "$", "1,299.00", "Agotado", "NaN", "$inf", "-Infinity", "1_000"])
def test_parse_price_returns_none_when_unparseable(text):
    assert parse_price(text) is None


def test_select_first_scopes_selector_to_container():
    soup = parse_document(
        '<div class="card">'
        '<a href="/outside">Outside</a>'
        '<div class="caption"><a href="/first">First</a><a href="/second">Second</a></div>'
        "</div>"
    )
    node = select_first(soup, "caption", "a")
    assert node is not None
    assert node["href"] == "/first"
    assert node_text(node) == "First"


def test_select_first_missing_returns_none():
    soup = parse_document('<div class="card"><span>$1</span></div>')
    assert select_first(soup, "product-item__price", "span") is None


def test_join_root_is_plain_concatenation():
    assert join_root("https://site.test", "/a") == "https://site.test/a"
    assert join_root("https://site.test", "a?b=1") == "https://site.testa?b=1"


def test_node_text_joins_fragments_with_single_spaces():
    soup = parse_document("<p>  Hasta <strong>40%</strong>\n de descuento </p>")
    assert node_text(soup.p) == "Hasta 40% de descuento"
