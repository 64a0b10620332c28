"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "receipt_scores",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer, "sqlite"), primary_key=True, autoincrement=True),
        sa.Column("receipt_id", sa.String(36), nullable=False),
        sa.Column("points", sa.BigInteger, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_receipt_scores_receipt_id", "receipt_scores", ["receipt_id"], unique=True)

def downgrade():
    op.drop_index("ix_receipt_scores_receipt_id", table_name="receipt_scores")
    op.drop_table("receipt_scores")
