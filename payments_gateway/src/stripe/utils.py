from typing import Any, Dict, List


def to_payload(obj: Any) -> Any:
    """Turn a Stripe SDK object into plain JSON-able data for the response body.

    Older SDK releases return dict subclasses, newer ones expose ``to_dict``.
    Plain dicts (and test doubles) pass through untouched.
    """
    if isinstance(obj, dict):
        return obj
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return obj


def lookup_keys_for(product_names: List[str]) -> List[str]:
    return [f"{name}-monthly-usd" for name in product_names]


def subscription_items(price_ids: List[str]) -> List[Dict[str, str]]:
    return [{"price": price_id} for price_id in price_ids]
