from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import inspect

from lensindex.adapters.sqlalchemy import create_all_tables, start_mappers

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_start_mappers_is_idempotent() -> None:
    # First invocation happens in the sqlite_engine fixture; calling again should be harmless.
    start_mappers()
    start_mappers()


def test_migrations_create_lens_tables(sqlite_engine: Engine) -> None:
    inspector = inspect(sqlite_engine)

    assert {"profile", "post", "comment"} <= set(inspector.get_table_names())
    post_fks = {fk["referred_table"] for fk in inspector.get_foreign_keys("post")}
    comment_fks = {fk["referred_table"] for fk in inspector.get_foreign_keys("comment")}
    assert post_fks == {"profile"}
    assert comment_fks == {"profile", "post"}


def test_create_all_tables_matches_migrated_schema(sqlite_engine: Engine) -> None:
    # tables already exist after migration; create_all must be a no-op
    create_all_tables(sqlite_engine)

    columns = {column["name"] for column in inspect(sqlite_engine).get_columns("comment")}
    assert {
        "id",
        "content_uri",
        "comment_id",
        "profile_id",
        "profile_ref_id",
        "original_post_id",
        "original_post_ref_id",
        "original_profile_id",
        "original_profile_ref_id",
        "timestamp",
    } == columns
