"""Reading whole result sets through Protean's paged queries."""

BATCH_SIZE = 100


def fetch_all(query, batch_size: int = BATCH_SIZE) -> list:
    """Walk every page of ``query`` and return all matching items.

    Protean applies the aggregate's default limit to unbounded queries, so
    anything that must see every match pages through explicitly.
    """
    items = []
    offset = 0
    while True:
        results = query.offset(offset).limit(batch_size).all()
        items.extend(results.items)
        if not results.has_next:
            return items
        offset += batch_size
