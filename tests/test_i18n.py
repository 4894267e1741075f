"""Tests for i18n translations"""
from storefront.i18n import SUPPORTED_LANGUAGES, detect_language, get_text


def test_get_text_existing_key():
    """Test getting existing translation"""
    assert get_text("toast.cart_added", "en") == "Added to cart"
    assert get_text("toast.cart_added", "ar") == "تمت الإضافة للسلة"


def test_get_text_missing_key_returns_key_or_default():
    """Test missing keys"""
    assert get_text("non_existent_key", "en") == "non_existent_key"
    assert get_text("non_existent_key", "en", default="x") == "x"


def test_partial_key_is_not_text():
    """Test that a section key does not return a dict"""
    assert get_text("toast", "en") == "toast"


def test_get_text_with_params():
    """Test getting text with parameters"""
    assert get_text("order.total", "en", total="10.00 $") == "Total: 10.00 $"


def test_unsupported_language_falls_back_to_arabic():
    assert get_text("empty.cart", "fr") == "السلة فارغة"


def test_detect_language():
    assert detect_language("en-GB") == "en"
    assert detect_language(None) == "ar"
    assert detect_language("de") == "ar"


def test_all_languages_have_toasts():
    """Test every supported language carries the notification texts"""
    for lang in SUPPORTED_LANGUAGES:
        for key in ("toast.cart_added", "toast.cart_removed", "toast.fav_added", "toast.fav_removed"):
            assert get_text(key, lang) != key
