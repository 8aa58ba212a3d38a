import pytest

from commonkit.redisx.options import (
    set_with_ex,
    set_with_exat,
    set_with_get,
    set_with_keepttl,
    set_with_nx,
    set_with_px,
    set_with_pxat,
    set_with_xx,
)


@pytest.mark.parametrize(
    "option, value, keyword",
    [
        (set_with_ex, 30, "EX"),
        (set_with_px, 1500, "PX"),
        (set_with_exat, 1531293019, "EXAT"),
        (set_with_pxat, 1531293019000, "PXAT"),
    ],
)
def test_valued_options(option, value, keyword):
    assert option(value) == (keyword, value)


@pytest.mark.parametrize(
    "option, keyword",
    [
        (set_with_nx, "NX"),
        (set_with_xx, "XX"),
        (set_with_keepttl, "KEEPTTL"),
        (set_with_get, "GET"),
    ],
)
def test_flag_options(option, keyword):
    assert option() == (keyword,)


def test_options_compose_in_order():
    args = []
    for option in (set_with_ex(10), set_with_nx()):
        args.extend(option)
    assert args == ["EX", 10, "NX"]