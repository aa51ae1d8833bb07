"""Ledger schema baseline

Revision ID: 20261019_01
Revises: None
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_primary_key(column_name: str) -> sa.Column:
    return sa.Column(
        column_name,
        postgresql.UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _created_at_column(column_name: str = "created_at_utc") -> sa.Column:
    return sa.Column(column_name, sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))


def upgrade() -> None:
    """Upgrade schema."""

    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table(
        "token",
        _uuid_primary_key("token_id"),
        sa.Column("mint_address", sa.Text(), nullable=False),
        sa.Column("symbol", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("decimals", sa.Integer(), nullable=False),
        sa.Column("logo_uri", sa.Text(), nullable=True),
        sa.Column("presale_completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at_column(),
        sa.UniqueConstraint("mint_address", name="uq_token_mint_address"),
        sa.CheckConstraint("decimals between 0 and 255", name="ck_token_decimals"),
    )

    op.create_table(
        "pool",
        _uuid_primary_key("pool_id"),
        sa.Column("pool_address", sa.Text(), nullable=False),
        sa.Column("token_a_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("token_b_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("lp_mint", sa.Text(), nullable=True),
        sa.Column("tick_spacing", sa.Integer(), nullable=True),
        sa.Column("fee_rate", sa.Integer(), nullable=True),
        _created_at_column(),
        sa.ForeignKeyConstraint(["token_a_id"], ["token.token_id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["token_b_id"], ["token.token_id"], ondelete="RESTRICT"),
        sa.UniqueConstraint("pool_address", name="uq_pool_pool_address"),
        sa.CheckConstraint("token_a_id <> token_b_id", name="ck_pool_distinct_tokens"),
    )

    op.create_table(
        "liquidity_position",
        _uuid_primary_key("position_id"),
        sa.Column("user_wallet", sa.Text(), nullable=False),
        sa.Column("pool_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("amount_token_a", sa.Numeric(), nullable=False, server_default=sa.text("0")),
        sa.Column("amount_token_b", sa.Numeric(), nullable=False, server_default=sa.text("0")),
        sa.Column("lp_tokens", sa.Numeric(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        _created_at_column(),
        _created_at_column("updated_at_utc"),
        sa.ForeignKeyConstraint(["pool_id"], ["pool.pool_id"], ondelete="SET NULL"),
        sa.UniqueConstraint("user_wallet", "pool_id", name="uq_liquidity_position_wallet_pool"),
        sa.CheckConstraint("lp_tokens > 0", name="ck_liquidity_position_lp_tokens_positive"),
        sa.CheckConstraint(
            "amount_token_a >= 0 and amount_token_b >= 0",
            name="ck_liquidity_position_amounts_non_negative",
        ),
    )
    op.create_index("ix_liquidity_position_user_wallet", "liquidity_position", ["user_wallet"])
    op.create_index("ix_liquidity_position_pool_id", "liquidity_position", ["pool_id"])

    op.create_table(
        "swap",
        _uuid_primary_key("swap_id"),
        sa.Column("pool_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("user_wallet", sa.Text(), nullable=False),
        sa.Column("token_in_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("token_out_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("amount_in", sa.Numeric(), nullable=False),
        sa.Column("amount_out", sa.Numeric(), nullable=False),
        sa.Column("tx_hash", sa.Text(), nullable=False),
        _created_at_column("executed_at_utc"),
        sa.ForeignKeyConstraint(["pool_id"], ["pool.pool_id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["token_in_id"], ["token.token_id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["token_out_id"], ["token.token_id"], ondelete="SET NULL"),
        sa.UniqueConstraint("tx_hash", name="uq_swap_tx_hash"),
    )
    op.create_index("ix_swap_user_wallet", "swap", ["user_wallet"])
    op.create_index("ix_swap_pool_id_executed_at_utc", "swap", ["pool_id", "executed_at_utc"])

    op.create_table(
        "fee_record",
        _uuid_primary_key("fee_record_id"),
        sa.Column("pool_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("user_wallet", sa.Text(), nullable=False),
        sa.Column("unclaimed_fee_a", sa.Numeric(), nullable=False, server_default=sa.text("0")),
        sa.Column("unclaimed_fee_b", sa.Numeric(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_claimed_at_utc", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.ForeignKeyConstraint(["pool_id"], ["pool.pool_id"], ondelete="SET NULL"),
        sa.UniqueConstraint("pool_id", "user_wallet", name="uq_fee_record_pool_wallet"),
    )
    op.create_index("ix_fee_record_user_wallet", "fee_record", ["user_wallet"])

    op.create_table(
        "presale",
        _uuid_primary_key("presale_id"),
        sa.Column("token_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("presale_address", sa.Text(), nullable=False),
        sa.Column("target_amount", sa.Numeric(), nullable=False),
        sa.Column("total_raised", sa.Numeric(), nullable=False, server_default=sa.text("0")),
        sa.Column("start_time_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'active'")),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        _created_at_column(),
        sa.ForeignKeyConstraint(["token_id"], ["token.token_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("token_id", name="uq_presale_token_id"),
        sa.UniqueConstraint("presale_address", name="uq_presale_presale_address"),
        sa.CheckConstraint("status in ('active', 'completed', 'cancelled')", name="ck_presale_status"),
        sa.CheckConstraint("start_time_utc < end_time_utc", name="ck_presale_window"),
    )

    op.create_table(
        "presale_contribution",
        _uuid_primary_key("contribution_id"),
        sa.Column("presale_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_wallet", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(), nullable=False),
        _created_at_column("contributed_at_utc"),
        sa.ForeignKeyConstraint(["presale_id"], ["presale.presale_id"], ondelete="CASCADE"),
        sa.CheckConstraint("amount > 0", name="ck_presale_contribution_amount_positive"),
    )
    op.create_index("ix_presale_contribution_presale_id", "presale_contribution", ["presale_id"])
    op.create_index("ix_presale_contribution_user_wallet", "presale_contribution", ["user_wallet"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_presale_contribution_user_wallet", table_name="presale_contribution")
    op.drop_index("ix_presale_contribution_presale_id", table_name="presale_contribution")
    op.drop_table("presale_contribution")
    op.drop_table("presale")
    op.drop_index("ix_fee_record_user_wallet", table_name="fee_record")
    op.drop_table("fee_record")
    op.drop_index("ix_swap_pool_id_executed_at_utc", table_name="swap")
    op.drop_index("ix_swap_user_wallet", table_name="swap")
    op.drop_table("swap")
    op.drop_index("ix_liquidity_position_pool_id", table_name="liquidity_position")
    op.drop_index("ix_liquidity_position_user_wallet", table_name="liquidity_position")
    op.drop_table("liquidity_position")
    op.drop_table("pool")
    op.drop_table("token")
