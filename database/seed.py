"""
Database seed data.
Initial data population for fresh database installations.
"""

import json

from werkzeug.security import generate_password_hash


DEFAULT_COTTAGES = [
    {
        'slug': 'willow-cottage',
        'name': 'Willow Cottage',
        'excerpt': 'A quiet two-bedroom cottage beside the willow pond.',
        'price_per_night': 120.0,
    },
    {
        'slug': 'oak-lodge',
        'name': 'Oak Lodge',
        'excerpt': 'Timber lodge for families, with a wood-burning stove.',
        'price_per_night': 160.0,
    },
    {
        'slug': 'meadow-cabin',
        'name': 'Meadow Cabin',
        'excerpt': 'Compact cabin for two overlooking the wildflower meadow.',
        'price_per_night': 90.0,
    },
]


def seed_cottages(db, cottages: list) -> int:
    """
    Upsert cottages, using the slug as the cottage ID when present.

    Args:
        db: Database connection
        cottages: List of dicts with slug/id, name, excerpt, price_per_night

    Returns:
        int: Number of cottages written
    """
    count = 0
    for item in cottages:
        cottage_id = str(item.get('id') or item.get('slug') or '').strip()
        if not cottage_id:
            raise ValueError(f"Cottage without id or slug: {item!r}")

        db.execute('''
            INSERT INTO cottages (id, name, slug, excerpt, price_per_night)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                slug = excluded.slug,
                excerpt = excluded.excerpt,
                price_per_night = excluded.price_per_night
        ''', (
            cottage_id,
            item.get('name') or 'Unnamed Cottage',
            item.get('slug') or cottage_id,
            item.get('excerpt') or '',
            float(item.get('price_per_night', item.get('pricePerNight', 0)) or 0)
        ))
        count += 1

    return count


def load_cottages_file(path: str) -> list:
    """Read a cottages JSON file (a list of cottage objects)."""
    with open(path, encoding='utf-8') as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError('Cottages file must contain a JSON list')
    return data


def seed_database(db):
    """Insert initial seed data."""

    # 1. Cottages
    seed_cottages(db, DEFAULT_COTTAGES)

    # 2. Default admin user
    password_hash = generate_password_hash('admin123')
    db.execute('''
        INSERT INTO users (username, email, password_hash, full_name, role, active)
        VALUES (?, ?, ?, ?, ?, ?)
    ''', ('admin', 'admin@greensretreat.co.uk', password_hash, 'Retreat Administrator', 'admin', 1))
