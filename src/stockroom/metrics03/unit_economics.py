# src/stockroom/metrics03/unit_economics.py

"""
Unit Economics
==============

Margin is profit as a percentage of the VAT-exclusive selling price.

    ex_vat = rrp / VAT_DIVISOR
    margin = (ex_vat - cost) / ex_vat * 100

Selling prices are VAT-inclusive at the UK standard rate (20%).
A zero price has a margin of 0. Loss-making items return a
negative margin. No rounding is applied here.
"""


VAT_DIVISOR = 1.2


def ex_vat_price(rrp: float, vat_divisor: float = VAT_DIVISOR) -> float:
    return rrp / vat_divisor


def margin_percent(cost: float, rrp: float, vat_divisor: float = VAT_DIVISOR) -> float:
    """
    Margin percentage of an item.

    Parameters
    ----------
    cost : float
        Supplier cost price.
    rrp : float
        VAT-inclusive selling price.
    vat_divisor : float
        1 + VAT rate.

    Returns
    -------
    float
        Margin in percent; 0.0 when ``rrp <= 0``.
    """

    if rrp <= 0:
        return 0.0

    ex_vat = ex_vat_price(rrp, vat_divisor)

    return (ex_vat - cost) / ex_vat * 100
