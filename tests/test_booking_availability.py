"""
Tests for booking availability and conflict checking.
"""

import sqlite3
from datetime import date, datetime

import pytest

from database import connect
from models.booking_availability import (
    check_booking_overlap,
    find_conflicting_bookings,
    list_blocked_ranges,
    list_confirmed_bookings,
    ranges_overlap,
    to_date,
)
from models.booking_errors import PersistenceUnavailable, store_errors


class LockedConnection:
    """Connection stand-in whose every query fails like a locked database."""

    def execute(self, *args, **kwargs):
        raise sqlite3.OperationalError('database is locked')

    def commit(self):
        pass

    def rollback(self):
        pass


class TestToDate:
    def test_accepts_dates_and_strings(self):
        assert to_date(date(2024, 3, 10)) == date(2024, 3, 10)
        assert to_date(datetime(2024, 3, 10, 15, 30)) == date(2024, 3, 10)
        assert to_date('2024-03-10') == date(2024, 3, 10)
        assert to_date('2024-03-10T00:00:00.000Z') == date(2024, 3, 10)

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            to_date('not a date')
        with pytest.raises(ValueError):
            to_date(None)


class TestRangesOverlap:
    """Half-open overlap rule."""

    A_IN, A_OUT = date(2024, 3, 10), date(2024, 3, 15)

    @pytest.mark.parametrize('b_in,b_out,expected', [
        # touching on either side is not an overlap
        (date(2024, 3, 15), date(2024, 3, 18), False),
        (date(2024, 3, 5), date(2024, 3, 10), False),
        # fully before / after
        (date(2024, 3, 1), date(2024, 3, 5), False),
        (date(2024, 3, 20), date(2024, 3, 25), False),
        # partial overlaps
        (date(2024, 3, 12), date(2024, 3, 20), True),
        (date(2024, 3, 8), date(2024, 3, 11), True),
        # containment and equality
        (date(2024, 3, 11), date(2024, 3, 12), True),
        (date(2024, 3, 1), date(2024, 3, 30), True),
        (date(2024, 3, 10), date(2024, 3, 15), True),
        # single night at the last night of A
        (date(2024, 3, 14), date(2024, 3, 15), True),
    ])
    def test_overlap(self, b_in, b_out, expected):
        assert ranges_overlap(self.A_IN, self.A_OUT, b_in, b_out) is expected
        # symmetric
        assert ranges_overlap(b_in, b_out, self.A_IN, self.A_OUT) is expected


class TestListConfirmedBookings:
    """Availability query."""

    def test_only_confirmed_returned(self, db, cottage_id, insert_booking):
        confirmed = insert_booking(cottage_id, '2024-03-10', '2024-03-15', 'confirmed')
        insert_booking(cottage_id, '2024-04-01', '2024-04-03', 'pending')
        insert_booking(cottage_id, '2024-05-01', '2024-05-05', 'cancelled')

        result = list_confirmed_bookings(db, cottage_id)

        assert [r['id'] for r in result] == [confirmed]
        assert result[0]['check_in'] == date(2024, 3, 10)
        assert result[0]['check_out'] == date(2024, 3, 15)

    def test_other_cottages_ignored(self, db, cottage_id, insert_booking):
        insert_booking('willow-cottage', '2024-03-10', '2024-03-15', 'confirmed')
        assert list_confirmed_bookings(db, cottage_id) == []

    def test_unknown_or_missing_cottage_is_empty(self, db):
        assert list_confirmed_bookings(db, 'no-such-cottage') == []
        assert list_confirmed_bookings(db, None) == []
        assert list_confirmed_bookings(db, '') == []

    def test_idempotent(self, db, cottage_id, insert_booking):
        insert_booking(cottage_id, '2024-03-10', '2024-03-15', 'confirmed')
        insert_booking(cottage_id, '2024-03-20', '2024-03-22', 'confirmed')

        assert list_confirmed_bookings(db, cottage_id) == list_confirmed_bookings(db, cottage_id)

    def test_store_failure_raises(self):
        with pytest.raises(PersistenceUnavailable):
            list_confirmed_bookings(LockedConnection(), 'test-cottage')


class TestListBlockedRanges:
    def test_pending_blocks_by_default(self, db, cottage_id, insert_booking):
        insert_booking(cottage_id, '2024-03-10', '2024-03-15', 'confirmed')
        insert_booking(cottage_id, '2024-04-01', '2024-04-03', 'pending')
        insert_booking(cottage_id, '2024-05-01', '2024-05-05', 'cancelled')

        statuses = [r['status'] for r in list_blocked_ranges(db, cottage_id)]
        assert statuses == ['confirmed', 'pending']

    def test_confirmed_only(self, db, cottage_id, insert_booking):
        insert_booking(cottage_id, '2024-04-01', '2024-04-03', 'pending')
        assert list_blocked_ranges(db, cottage_id, include_pending=False) == []


class TestCheckBookingOverlap:
    """Conflict checker."""

    def test_back_to_back_allowed(self, db, cottage_id, insert_booking):
        insert_booking(cottage_id, '2024-03-10', '2024-03-15', 'confirmed')
        assert check_booking_overlap(db, cottage_id, date(2024, 3, 15), date(2024, 3, 18)) is False
        assert check_booking_overlap(db, cottage_id, date(2024, 3, 7), date(2024, 3, 10)) is False

    def test_overlap_detected(self, db, cottage_id, insert_booking):
        insert_booking(cottage_id, '2024-03-10', '2024-03-15', 'confirmed')
        assert check_booking_overlap(db, cottage_id, date(2024, 3, 12), date(2024, 3, 20)) is True

    def test_pending_blocks(self, db, cottage_id, insert_booking):
        insert_booking(cottage_id, '2024-03-10', '2024-03-15', 'pending')
        assert check_booking_overlap(db, cottage_id, date(2024, 3, 14), date(2024, 3, 16)) is True

    def test_cancelled_does_not_block(self, db, cottage_id, insert_booking):
        insert_booking(cottage_id, '2024-05-01', '2024-05-05', 'cancelled')
        assert check_booking_overlap(db, cottage_id, date(2024, 5, 1), date(2024, 5, 5)) is False

    def test_other_cottage_does_not_block(self, db, cottage_id, insert_booking):
        insert_booking('oak-lodge', '2024-03-10', '2024-03-15', 'confirmed')
        assert check_booking_overlap(db, cottage_id, date(2024, 3, 10), date(2024, 3, 15)) is False

    def test_excluded_booking_ignored(self, db, cottage_id, insert_booking):
        own = insert_booking(cottage_id, '2024-04-01', '2024-04-05', 'confirmed')
        assert check_booking_overlap(db, cottage_id, date(2024, 4, 1), date(2024, 4, 5)) is True
        assert check_booking_overlap(
            db, cottage_id, date(2024, 4, 1), date(2024, 4, 5), exclude_booking_id=own
        ) is False

    def test_exclusion_does_not_hide_others(self, db, cottage_id, insert_booking):
        own = insert_booking(cottage_id, '2024-04-01', '2024-04-05', 'confirmed')
        insert_booking(cottage_id, '2024-04-05', '2024-04-08', 'confirmed')
        assert check_booking_overlap(
            db, cottage_id, date(2024, 4, 1), date(2024, 4, 7), exclude_booking_id=own
        ) is True

    def test_candidate_starting_later_is_not_fetched(self, db, cottage_id, insert_booking):
        """A booking starting on the proposed check-out day is never a conflict."""
        insert_booking(cottage_id, '2024-03-18', '2024-03-20', 'confirmed')
        conflicts = find_conflicting_bookings(db, cottage_id, date(2024, 3, 15), date(2024, 3, 18))
        assert conflicts == []

    def test_string_dates_accepted(self, db, cottage_id, insert_booking):
        insert_booking(cottage_id, '2024-03-10', '2024-03-15', 'confirmed')
        assert check_booking_overlap(db, cottage_id, '2024-03-14', '2024-03-16') is True

    def test_conflicts_listed(self, db, cottage_id, insert_booking):
        first = insert_booking(cottage_id, '2024-03-10', '2024-03-15', 'confirmed')
        second = insert_booking(cottage_id, '2024-03-15', '2024-03-18', 'pending')

        conflicts = find_conflicting_bookings(db, cottage_id, date(2024, 3, 14), date(2024, 3, 16))
        assert sorted(c['id'] for c in conflicts) == sorted([first, second])

    def test_store_failure_is_not_treated_as_available(self):
        with pytest.raises(PersistenceUnavailable):
            check_booking_overlap(LockedConnection(), 'test-cottage', date(2024, 3, 1), date(2024, 3, 2))


class TestStoreErrors:
    """Store failures map to PersistenceUnavailable; other errors pass through."""

    @pytest.mark.parametrize('error', [
        sqlite3.OperationalError('database is locked'),
        sqlite3.DatabaseError('file is not a database'),
        PermissionError('read-only file system'),
    ])
    def test_store_failures_are_unavailable(self, error):
        with pytest.raises(PersistenceUnavailable):
            with store_errors():
                raise error

    def test_constraint_violations_propagate(self):
        with pytest.raises(sqlite3.IntegrityError):
            with store_errors():
                raise sqlite3.IntegrityError('UNIQUE constraint failed')

    def test_corrupt_database_file(self, tmp_path):
        path = tmp_path / 'corrupt.db'
        path.write_bytes(b'this is not an sqlite database file' * 64)

        with pytest.raises(PersistenceUnavailable):
            connect(str(path))

    def test_unopenable_path(self, tmp_path):
        not_a_directory = tmp_path / 'plain-file'
        not_a_directory.write_text('')

        with pytest.raises(PersistenceUnavailable):
            connect(str(not_a_directory / 'greens_retreat.db'))
