"""Display formatting for rupee amounts (Indian digit grouping)."""


def format_inr(amount: float, decimals: int = 0) -> str:
    """Format `amount` as rupees grouped 3 then 2 digits: 1234567 -> ₹12,34,567."""
    text = f"{abs(amount):.{decimals}f}"
    sign = "-" if amount < 0 and float(text) != 0 else ""
    whole, _, frac = text.partition(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{sign}₹{whole}" + (f".{frac}" if frac else "")
