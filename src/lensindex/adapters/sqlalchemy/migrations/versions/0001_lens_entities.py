"""Create profile, post and comment tables.

Revision ID: 0001_lens_entities
Revises:
Create Date: 2026-10-19 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from lensindex.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001_lens_entities"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profile",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("profile_id", sa.BigInteger(), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("handle", sa.String(), nullable=True),
        sa.Column("image_uri", sa.String(), nullable=True),
        sa.Column("timestamp", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_profile")),
    )
    op.create_table(
        "post",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("content_uri", sa.String(), nullable=True),
        sa.Column("post_id", sa.BigInteger(), nullable=False),
        sa.Column("profile_id", sa.BigInteger(), nullable=False),
        sa.Column("creator_profile_id", sa.String(), nullable=False),
        sa.Column("timestamp", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["creator_profile_id"],
            ["profile.id"],
            name=op.f("fk_post_post_creator_profile_id_profile"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_post")),
    )
    op.create_index(op.f("ix_post_creator_profile_id"), "post", ["creator_profile_id"])
    op.create_table(
        "comment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("content_uri", sa.String(), nullable=True),
        sa.Column("comment_id", sa.BigInteger(), nullable=False),
        sa.Column("profile_id", sa.BigInteger(), nullable=False),
        sa.Column("profile_ref_id", sa.String(), nullable=False),
        sa.Column("original_post_id", sa.BigInteger(), nullable=False),
        sa.Column("original_post_ref_id", sa.String(), nullable=False),
        sa.Column("original_profile_id", sa.BigInteger(), nullable=False),
        sa.Column("original_profile_ref_id", sa.String(), nullable=False),
        sa.Column("timestamp", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["profile_ref_id"],
            ["profile.id"],
            name=op.f("fk_comment_comment_profile_ref_id_profile"),
        ),
        sa.ForeignKeyConstraint(
            ["original_post_ref_id"],
            ["post.id"],
            name=op.f("fk_comment_comment_original_post_ref_id_post"),
        ),
        sa.ForeignKeyConstraint(
            ["original_profile_ref_id"],
            ["profile.id"],
            name=op.f("fk_comment_comment_original_profile_ref_id_profile"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_comment")),
    )
    op.create_index(op.f("ix_comment_profile_ref_id"), "comment", ["profile_ref_id"])
    op.create_index(op.f("ix_comment_original_post_ref_id"), "comment", ["original_post_ref_id"])
    op.create_index(
        op.f("ix_comment_original_profile_ref_id"), "comment", ["original_profile_ref_id"]
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_comment_original_profile_ref_id"), table_name="comment")
    op.drop_index(op.f("ix_comment_original_post_ref_id"), table_name="comment")
    op.drop_index(op.f("ix_comment_profile_ref_id"), table_name="comment")
    op.drop_table("comment")
    op.drop_index(op.f("ix_post_creator_profile_id"), table_name="post")
    op.drop_table("post")
    op.drop_table("profile")
