"""Display helpers for property values."""


def group_indian(number: int) -> str:
    """Digit grouping used in India: last three digits, then pairs (12,34,567)."""
    digits = str(abs(number))
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    groups.append(tail)
    return ("-" if number < 0 else "") + ",".join(groups)


def format_price(price: float) -> str:
    """Whole-rupee price, e.g. ``₹2,50,000``."""
    return "₹" + group_indian(int(round(price)))
