"""create users, templates, nfc postcards and meetup photos

Revision ID: a1c2e3f40001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a1c2e3f40001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("handle", sa.String(), nullable=False),
        sa.Column("platform", sa.String(length=16), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("platform", "handle", name="uq_users_platform_handle"),
        sa.UniqueConstraint("platform", "external_id", name="uq_users_platform_external_id"),
        sa.CheckConstraint("platform IN ('twitter', 'telegram', 'email', 'other')", name="ck_users_platform"),
    )
    op.create_index(op.f("ix_users_slug"), "users", ["slug"], unique=True)
    op.create_index(op.f("ix_users_external_id"), "users", ["external_id"], unique=False)

    op.create_table(
        "postcard_templates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("template_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_postcard_templates_template_id"), "postcard_templates", ["template_id"], unique=True)

    op.create_table(
        "nfc_postcards",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("postcard_hash", sa.String(length=32), nullable=False),
        sa.Column("sender_id", sa.Integer(), nullable=True),
        sa.Column("recipient_id", sa.Integer(), nullable=True),
        sa.Column("template_id", sa.Integer(), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("custom_image_url", sa.String(), nullable=True),
        sa.Column("is_activated", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("activated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["template_id"], ["postcard_templates.id"]),
    )
    op.create_index(op.f("ix_nfc_postcards_postcard_hash"), "nfc_postcards", ["postcard_hash"], unique=True)
    op.create_index(op.f("ix_nfc_postcards_sender_id"), "nfc_postcards", ["sender_id"], unique=False)
    op.create_index(op.f("ix_nfc_postcards_recipient_id"), "nfc_postcards", ["recipient_id"], unique=False)

    op.create_table(
        "meetup_photos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("postcard_id", sa.Integer(), nullable=False),
        sa.Column("photo_url", sa.String(), nullable=False),
        sa.Column("caption", sa.Text(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["postcard_id"], ["nfc_postcards.id"], ondelete="CASCADE"),
    )
    op.create_index(op.f("ix_meetup_photos_postcard_id"), "meetup_photos", ["postcard_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_meetup_photos_postcard_id"), table_name="meetup_photos")
    op.drop_table("meetup_photos")
    op.drop_index(op.f("ix_nfc_postcards_recipient_id"), table_name="nfc_postcards")
    op.drop_index(op.f("ix_nfc_postcards_sender_id"), table_name="nfc_postcards")
    op.drop_index(op.f("ix_nfc_postcards_postcard_hash"), table_name="nfc_postcards")
    op.drop_table("nfc_postcards")
    op.drop_index(op.f("ix_postcard_templates_template_id"), table_name="postcard_templates")
    op.drop_table("postcard_templates")
    op.drop_index(op.f("ix_users_external_id"), table_name="users")
    op.drop_index(op.f("ix_users_slug"), table_name="users")
    op.drop_table("users")
