"""Create users, content, terms and their meta tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLE_NAMES = ("user", "editor", "manager", "admin", "superadmin")

META_TABLES = {
    "content_meta": "content.id",
    "term_meta": "terms.id",
    "user_meta": "users.id",
}


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("permissions", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_roles_id"), "roles", ["id"], unique=False)
    op.bulk_insert(
        sa.table("roles", sa.column("name", sa.String()), sa.column("permissions", sa.JSON())),
        [{"name": name, "permissions": []} for name in ROLE_NAMES],
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("roles.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=False)

    op.create_table(
        "content",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("status", sa.Enum("DRAFT", "PENDING", "PUBLISHED", name="contentstatus"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_content_id"), "content", ["id"], unique=False)
    op.create_index(op.f("ix_content_title"), "content", ["title"], unique=False)
    op.create_index(op.f("ix_content_slug"), "content", ["slug"], unique=True)
    op.create_index(op.f("ix_content_author_id"), "content", ["author_id"], unique=False)
    op.create_index("idx_content_status", "content", ["status"], unique=False)

    op.create_table(
        "terms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("taxonomy", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("terms.id"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("taxonomy", "slug", name="unique_taxonomy_slug"),
    )
    op.create_index(op.f("ix_terms_id"), "terms", ["id"], unique=False)
    op.create_index(op.f("ix_terms_taxonomy"), "terms", ["taxonomy"], unique=False)
    op.create_index(op.f("ix_terms_slug"), "terms", ["slug"], unique=False)

    for table, target in META_TABLES.items():
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("object_id", sa.Integer(), sa.ForeignKey(target, ondelete="CASCADE"), nullable=False),
            sa.Column("meta_key", sa.String(length=255), nullable=False),
            sa.Column("meta_value", sa.JSON(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f(f"ix_{table}_id"), table, ["id"], unique=False)
        op.create_index(op.f(f"ix_{table}_object_id"), table, ["object_id"], unique=False)
        op.create_index(op.f(f"ix_{table}_meta_key"), table, ["meta_key"], unique=False)


def downgrade() -> None:
    for table in reversed(list(META_TABLES)):
        op.drop_table(table)
    op.drop_table("terms")
    op.drop_table("content")
    op.drop_table("users")
    op.drop_table("roles")
