"""
Cottage data access functions.
Cottages are managed by the CMS; bookings only read them.
"""

from .booking_errors import BookingNotFound, store_errors


def get_all_cottages(db) -> list:
    """
    Get all cottages ordered by name.

    Args:
        db: Database connection

    Returns:
        list: Cottage dicts (id, name, slug, excerpt, price_per_night)
    """
    with store_errors():
        cursor = db.execute('''
            SELECT id, name, slug, excerpt, price_per_night
            FROM cottages
            ORDER BY name
        ''')
        rows = cursor.fetchall()

    return [
        {
            'id': row['id'],
            'name': row['name'] or 'Unnamed Cottage',
            'slug': row['slug'] or row['id'],
            'excerpt': row['excerpt'] or '',
            'price_per_night': row['price_per_night'] or 0,
        }
        for row in rows
    ]


def get_cottage_by_id(db, cottage_id: str) -> dict:
    """
    Get cottage by ID.

    Args:
        db: Database connection
        cottage_id: Cottage ID

    Returns:
        dict: Cottage or None if not found
    """
    if not cottage_id:
        return None

    with store_errors():
        row = db.execute('SELECT * FROM cottages WHERE id = ?', (cottage_id,)).fetchone()
    return dict(row) if row else None


def get_cottage_nightly_rate(db, cottage_id: str) -> float:
    """
    Get the nightly rate of a cottage.

    A cottage with no rate set is priced at 0.

    Raises:
        BookingNotFound: If the cottage does not exist
    """
    cottage = get_cottage_by_id(db, cottage_id)
    if cottage is None:
        raise BookingNotFound('The selected cottage does not exist.')
    return float(cottage.get('price_per_night') or 0)
