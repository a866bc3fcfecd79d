"""Unit tests for effective price resolution"""

import pytest
from conftest import make_entry, make_line
from babylist_gateway.domain.pricing import resolve_unit_price, resolve_vip_price


@pytest.mark.parametrize("catalog_price", [100, 2500, 9900, 50000])
def test_mandatory_line_ignores_catalog_price(catalog_price):
    """Mandatory lines keep the registry price whatever the catalog says"""
    line = make_line(unit_price_cents=4000, mandatory=True)
    entry = make_entry(price_cents=catalog_price, regular_price_cents=catalog_price, vip_price_cents=catalog_price)

    price = resolve_unit_price(line, entry, gifted=False, viewer_is_vip=True, coupon_override=True)

    assert price == 4000


def test_gifted_line_ignores_catalog_price():
    line = make_line(unit_price_cents=4000, available_qty=0)
    entry = make_entry(price_cents=1000)

    assert resolve_unit_price(line, entry, gifted=True, viewer_is_vip=False) == 4000


def test_unmatched_line_uses_raw_price():
    line = make_line(unit_price_cents=4200)

    assert resolve_unit_price(line, None, gifted=False, viewer_is_vip=True, coupon_override=True) == 4200


def test_coupon_override_uses_regular_price():
    """An overriding coupon beats both the VIP and the promotional price"""
    line = make_line()
    entry = make_entry(price_cents=2000, regular_price_cents=2500, vip_price_cents=1800)

    assert resolve_unit_price(line, entry, gifted=False, viewer_is_vip=True, coupon_override=True) == 2500


def test_vip_price_requires_all_three_conditions():
    """VIP price only when viewer is VIP, a VIP price exists, and no coupon override"""
    line = make_line()
    with_vip = make_entry(price_cents=2000, regular_price_cents=2500, vip_price_cents=1800)
    without_vip = make_entry(price_cents=2000, regular_price_cents=2500, vip_price_cents=None)

    assert resolve_unit_price(line, with_vip, gifted=False, viewer_is_vip=True) == 1800

    # Viewer not VIP
    assert resolve_unit_price(line, with_vip, gifted=False, viewer_is_vip=False) == 2000
    # No VIP price exposed
    assert resolve_unit_price(line, without_vip, gifted=False, viewer_is_vip=True) == 2000
    # Coupon override active: regular price
    assert resolve_unit_price(line, with_vip, gifted=False, viewer_is_vip=True, coupon_override=True) == 2500


def test_variable_product_uses_variation_vip_price():
    """Variable products resolve the variant's VIP price, not the parent's"""
    entry = make_entry(
        price_cents=2000,
        vip_price_cents=1500,
        variation_vip_price_cents=1700,
        is_variable_product=True,
    )

    assert resolve_vip_price(entry) == 1700
    assert resolve_unit_price(make_line(), entry, gifted=False, viewer_is_vip=True) == 1700


def test_variable_product_without_variation_price_falls_back_to_current_price():
    entry = make_entry(price_cents=2000, vip_price_cents=1500, is_variable_product=True)

    assert resolve_unit_price(make_line(), entry, gifted=False, viewer_is_vip=True) == 2000


def test_standard_price_by_default():
    entry = make_entry(price_cents=2100, regular_price_cents=2500)

    assert resolve_unit_price(make_line(unit_price_cents=9999), entry, gifted=False, viewer_is_vip=False) == 2100
