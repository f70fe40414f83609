import sqlalchemy as sa
from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

MEAL_SLOTS = ("breakfast", "lunch", "dinner")


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("mobile", sa.String(10), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column(
            "subscription_type",
            sa.Enum("daily", "monthly", name="subscription_type", native_enum=False),
            nullable=False,
        ),
        sa.Column("daily_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("active", "paused", name="customer_status", native_enum=False),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "menu_items",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column(
            "category",
            sa.Enum(*MEAL_SLOTS, name="meal_slot", native_enum=False),
            nullable=False,
        ),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("available", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "daily_extras",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("customer_id", sa.String(36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column(
            "meal_slot",
            sa.Enum(*MEAL_SLOTS, name="meal_slot", native_enum=False),
            nullable=False,
        ),
        sa.Column("menu_item_id", sa.String(36), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "customer_id", "date", "meal_slot", name="uq_daily_extras_slot"
        ),
    )
    op.create_index("ix_daily_extras_date", "daily_extras", ["date"])
    op.create_table(
        "advance_payments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("customer_id", sa.String(36), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("paid_on", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "ix_advance_payments_customer_year",
        "advance_payments",
        ["customer_id", "year"],
    )


def downgrade() -> None:
    op.drop_index("ix_advance_payments_customer_year", table_name="advance_payments")
    op.drop_table("advance_payments")
    op.drop_index("ix_daily_extras_date", table_name="daily_extras")
    op.drop_table("daily_extras")
    op.drop_table("menu_items")
    op.drop_table("customers")
