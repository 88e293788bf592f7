from codex_cms.extensions import db


def compact_order(items, order_field="order", start=0):
    """
    Re-assigns sequential order values (start..N) keeping the current relative order.
    """
    ordered = sorted(items, key=lambda item: getattr(item, order_field) or 0)

    for index, item in enumerate(ordered, start=start):
        setattr(item, order_field, index)

    db.session.flush()
    return ordered
