import pytest

from db import Store
from exceptions import StoreError


@pytest.fixture
def raw(tmp_path):
    s = Store(tmp_path / "raw.db")
    s.init_db()
    return s


def insert_row(store, **overrides):
    params = dict(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password_hash="hash",
        is_active=1,
        registration_date="2025-01-01T00:00:00.000000+00:00",
        renewal_date="2026-01-01T00:00:00.000000+00:00",
        membership_type_id=1,
    )
    params.update(overrides)
    return store.execute_insert(
        """
        INSERT INTO members(first_name, last_name, email, password_hash, is_active,
                            registration_date, renewal_date, membership_type_id)
        VALUES(:first_name, :last_name, :email, :password_hash, :is_active,
               :registration_date, :renewal_date, :membership_type_id)
        """,
        params,
    )


def test_init_db_is_idempotent(raw):
    raw.init_db()
    assert raw.execute_query("SELECT COUNT(*) AS c FROM members") == [{"c": 0}]


def test_query_returns_dict_rows(raw):
    new_id = insert_row(raw)
    rows = raw.execute_query("SELECT id, email FROM members WHERE id = :id", {"id": new_id})
    assert rows == [{"id": new_id, "email": "ada@example.com"}]


def test_non_query_returns_affected_count(raw):
    insert_row(raw)
    insert_row(raw, email="b@example.com")
    assert raw.execute_non_query("UPDATE members SET is_active = 0") == 2
    assert raw.execute_non_query("DELETE FROM members WHERE id = :id", {"id": 999}) == 0


def test_missing_parameter_is_an_error_not_null(raw):
    with pytest.raises(StoreError):
        raw.execute_query("SELECT * FROM members WHERE email = :email", {})


def test_explicit_none_binds_null(raw):
    rows = raw.execute_query("SELECT :value IS NULL AS is_null", {"value": None})
    assert rows == [{"is_null": 1}]


def test_check_constraint_violation_raises_store_error(raw):
    with pytest.raises(StoreError):
        insert_row(raw, membership_type_id=0)
    assert raw.execute_query("SELECT COUNT(*) AS c FROM members") == [{"c": 0}]


def test_bad_sql_raises_store_error_with_cause(raw):
    with pytest.raises(StoreError) as exc:
        raw.execute_non_query("UPDATE no_such_table SET x = 1")
    assert exc.value.__cause__ is not None


def test_unreachable_database_raises_store_error(tmp_path):
    s = Store(tmp_path / "missing-dir" / "x.db")
    with pytest.raises(StoreError):
        s.execute_query("SELECT 1")
